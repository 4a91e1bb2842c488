"""Speech recognition front-end: resampling, LFR/CMVN features, token sets and CTC decoding."""

__version__ = "0.1.0"