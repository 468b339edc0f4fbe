"""Passport OCR Extractor.

Turns a passport image into structured holder and document fields by
running OCR, parsing the returned text with label heuristics and the
machine-readable zone, and formatting the result into reservation
system commands.
"""
