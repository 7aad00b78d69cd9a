"""Offline models of the protocol's fixed-point math."""
