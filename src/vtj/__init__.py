"""Video Transcode Job: plan, submit and monitor MediaConvert transcodes."""

__version__ = "0.1.0"
