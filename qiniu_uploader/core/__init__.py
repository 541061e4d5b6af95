"""Core building blocks: configuration, paths, errors and the upload pipeline."""
