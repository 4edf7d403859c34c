"""Golden models: direct-form bit-exact reference and SRRC tap design."""
