"""
Hardware abstraction layer for StrideBeat.

This package provides abstractions for the audio output and motion input
devices. It isolates the cadence pipeline from the details of specific
hardware implementations.
"""
