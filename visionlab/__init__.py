"""Classic image-processing operations on NumPy arrays: histograms, lookup tables,
colour spaces, colour reduction, filters, colour detection and serial output."""

__version__ = "0.1.0"