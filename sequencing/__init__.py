"""Boarding sequence generation and the command line harness around it."""

from .generator import BoardingSequenceEntry, ProcessingResult, generate_boarding_sequence

__all__ = ["BoardingSequenceEntry", "ProcessingResult", "generate_boarding_sequence"]
