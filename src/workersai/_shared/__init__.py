"""Shared models and helpers used by the encoder, decoder and client."""
