"""
Chunked audio transcription service.

This package fetches a remote audio file, splits it into fixed-size byte
segments, sends each segment to a hosted Whisper model and stitches the
per-segment text back together in order.  The HTTP entrypoint lives in
:mod:`chunkscribe.main`.
"""
