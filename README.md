# asrfront

Building blocks for the front end and the decoding step of a speech
recognition system. The package covers the parts of the pipeline that sit
around an acoustic model: it does not run the model itself.

## What it provides

- `asrfront.resample.LinearResample` resamples audio between any two integer
  sample rates with a windowed-sinc filter. It can work on a whole signal or
  in streaming pieces.
- `asrfront.config.FrontendConfig` reads front-end settings from a model's
  YAML configuration. `FrontendConfig.from_yaml` handles offline models and
  `FrontendConfig.from_online_yaml` handles streaming models.
- `asrfront.features` loads Kaldi-style CMVN statistics (`load_cmvn`). It
  stacks frames into low-frame-rate features (`apply_lfr`), normalises them
  (`apply_cmvn`), and can do both in one step (`lfr_cmvn`).
- `asrfront.phone_set.PhoneSet` maps between tokens and ids. It loads from a
  JSON token list with `PhoneSet.from_json`.
- `asrfront.seg_dict.SegDict` looks up the sub-word segmentation of a word.
  It loads from a tab-separated dictionary with `SegDict.from_file`.
- `asrfront.languages` gives the language and text-normalisation ids that a
  SenseVoice-style model expects (`language_id`, `textnorm_id`).
- `asrfront.ctc` does greedy CTC decoding (`greedy_ids`, `ctc_collapse`,
  `ctc_search`). `format_sensevoice` renders its output with the language,
  emotion and event tags in front.
- `asrfront.utf8_string` holds helpers for UTF-8 text: character lengths,
  splitting into characters, trimming and splitting on a delimiter.

## Installation

```
pip install .
```

## Examples

Resample a signal from 8 kHz to 16 kHz:

```python
from asrfront.resample import LinearResample

resampler = LinearResample(8000, 16000, 3800.0, 6)
output = resampler.resample(samples, flush=True)
```

Build model input features from filterbank frames:

```python
from asrfront.features import load_cmvn, lfr_cmvn

cmvn = load_cmvn("am.mvn")
features = lfr_cmvn(frames, cmvn, lfr_m=7, lfr_n=6)
```

Decode CTC scores from a model:

```python
from asrfront.ctc import ctc_search
from asrfront.phone_set import PhoneSet

tokens = PhoneSet.from_json("tokens.json")
text = ctc_search(scores, length, tokens.id_to_string, blank_id=0)
```

## Running the tests

```
pip install .[test]
pytest
```