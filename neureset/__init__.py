"""Simulated neurofeedback treatment device: EEG sites, treatment controller, battery and front panel."""

__version__ = "0.1.0"
__all__ = ["__version__"]