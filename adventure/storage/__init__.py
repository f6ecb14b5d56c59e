"""Room directories on disk: the per-room text format and finding the latest graph."""
