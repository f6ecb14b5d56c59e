"""Random mansion-room adventure: a graph generator and a text player."""
