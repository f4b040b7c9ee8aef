"""
text2speech - Text to spoken audio conversion using Microsoft Edge TTS.

A small CLI utility that sends text to the Edge online text-to-speech
service and saves the returned audio to a file.
"""

__version__ = "0.1.0"

from .model import SynthesisRequest, build_request, clean_markdown, edge_synthesize, synthesize_to_file
from .cli import main

__all__ = ["SynthesisRequest", "build_request", "clean_markdown", "edge_synthesize", "synthesize_to_file", "main"]
