"""Reference models and stimulus for the filter datapath."""
