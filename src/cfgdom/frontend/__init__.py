"""Readers turning textual CFG specs into edge records."""

from .specreader import SpecRecord, parseLine, readSpec, parseSpecText, loadSpecFile

__all__ = ["SpecRecord", "parseLine", "readSpec", "parseSpecText", "loadSpecFile"]
