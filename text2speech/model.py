"""
Model module for text2speech package.

Contains synthesis defaults, the request type, the Edge TTS backend and the
validate -> synthesize -> write sequence.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, Optional, Union

import edge_tts
import regex as re

# ----------------------------
# Defaults
# ----------------------------
DEFAULT_VOICE = "en-US-AriaNeural"
DEFAULT_RATE = "+0%"
DEFAULT_VOLUME = "+0%"
FIXED_PITCH = "+0Hz"


class Text2SpeechError(Exception):
    """Base class for errors raised by text2speech."""


class MissingParameterError(Text2SpeechError):
    """Raised when text or output is missing before synthesis."""

    def __init__(self, message: str = "Missing --text or --output"):
        super().__init__(message)


@dataclass(frozen=True)
class SynthesisRequest:
    text: str
    voice: str = DEFAULT_VOICE
    rate: str = DEFAULT_RATE
    volume: str = DEFAULT_VOLUME
    pitch: str = FIXED_PITCH


Synthesizer = Callable[[SynthesisRequest], Awaitable[bytes]]


def build_request(
    text: str,
    voice: Optional[str] = None,
    rate: Optional[str] = None,
    volume: Optional[str] = None,
) -> SynthesisRequest:
    """Build a request, using the defaults for absent or empty values."""
    return SynthesisRequest(
        text=text,
        voice=voice or DEFAULT_VOICE,
        rate=rate or DEFAULT_RATE,
        volume=volume or DEFAULT_VOLUME,
        pitch=FIXED_PITCH,
    )


# ----------------------------
# Text input
# ----------------------------
def load_text(path: Path, strip_markdown: bool = False) -> str:
    """Load a UTF-8 text file, optionally stripping Markdown formatting."""
    raw = Path(path).read_text(encoding="utf-8")
    return clean_markdown(raw) if strip_markdown else raw


def clean_markdown(raw: str) -> str:
    """Strip Markdown formatting, keeping link and inline code text."""
    txt = re.sub(r"```.*?```", "", raw, flags=re.DOTALL)
    txt = re.sub(r"`([^`]*)`", r"\1", txt)
    txt = re.sub(r"!\[.*?\]\(.*?\)", "", txt)
    txt = re.sub(r"\[([^\]]+)\]\((?:[^)]+)\)", r"\1", txt)
    txt = re.sub(r"^[ \t]{0,3}(?:#{1,6}|[-*+]|\d+\.)[ \t]+", "", txt, flags=re.MULTILINE)
    txt = re.sub(r"\n{3,}", "\n\n", txt)
    return txt.strip()


# ----------------------------
# Synthesis
# ----------------------------
async def edge_synthesize(request: SynthesisRequest, proxy: Optional[str] = None) -> bytes:
    """
    Synthesize speech with the Microsoft Edge online TTS service.

    Args:
        request: Text, voice and prosody settings
        proxy: Optional HTTP proxy URL for the websocket connection

    Returns:
        The audio payload exactly as streamed by the service (MP3)
    """
    communicate = edge_tts.Communicate(
        request.text,
        request.voice,
        rate=request.rate,
        volume=request.volume,
        pitch=request.pitch,
        proxy=proxy,
    )
    audio = bytearray()
    async for chunk in communicate.stream():
        if chunk["type"] == "audio":
            audio.extend(chunk["data"])
    return bytes(audio)


def write_audio(path: Union[str, Path], data: bytes) -> Path:
    """Write the payload to path, replacing any existing file."""
    out_path = Path(path)
    with open(out_path, "wb") as fh:
        fh.write(data)
    return out_path


async def synthesize_to_file(
    request: SynthesisRequest,
    output: Union[str, Path, None],
    synthesize: Synthesizer,
) -> Path:
    """
    Validate the request, synthesize it and write the audio to output.

    The output file is only opened once synthesis has returned, so a failed
    synthesis leaves any existing file at output untouched.
    """
    if not request.text or not output:
        raise MissingParameterError()
    audio = await synthesize(request)
    return write_audio(output, audio)
