"""
braw2ilpd: ILPD extraction for Blackmagic RAW immersive clips

This package reads the immersive lens attributes of a .braw clip through a
pluggable codec backend and writes:
- the ILPD projection data file, named from the clip's own attributes
- optionally, a detailed report of every attribute

Main components:
- extractors/: variant decoding and attribute extraction
- naming.py: output name synthesis and path resolution
- output.py: atomic file writer
- report.py: detailed attribute report
- cli.py: command line interface
"""

__version__ = "0.1.0"
