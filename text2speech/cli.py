"""
CLI module for text2speech package.

Contains command-line argument parsing and main application logic.
"""

import argparse
import asyncio
import functools
import sys
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

from .model import (
    DEFAULT_VOICE,
    MissingParameterError,
    Synthesizer,
    build_request,
    clean_markdown,
    edge_synthesize,
    load_text,
    synthesize_to_file,
)
from .ui import play_audio_file, progress_context

EXIT_FAILURE = 1

# Flags that always take the next token as their value, with their short forms.
VALUE_FLAGS = {
    "--text": "--text",
    "--output": "--output",
    "-w": "--output",
    "--voice": "--voice",
    "-v": "--voice",
    "--rate": "--rate",
    "-r": "--rate",
    "--volume": "--volume",
    "-u": "--volume",
    "--file": "--file",
    "-f": "--file",
    "--proxy": "--proxy",
}


class UsageErrorParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit status 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_FAILURE, f"{self.prog}: error: {message}\n")


# ----------------------------
# CLI setup
# ----------------------------
def normalize_argv(argv: Sequence[str]) -> List[str]:
    """
    Bind every value flag to the token that follows it.

    ``--volume -50%`` and ``-u -50%`` both become ``--volume=-50%`` so the
    value is consumed even when it looks like another flag. A value flag
    given as the last token is left alone and argparse reports it as
    missing its argument.
    """
    out = []
    i = 0
    while i < len(argv):
        token = argv[i]
        if token in VALUE_FLAGS and i + 1 < len(argv):
            out.append(f"{VALUE_FLAGS[token]}={argv[i + 1]}")
            i += 2
        else:
            out.append(token)
            i += 1
    return out


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = UsageErrorParser(
        prog="text2speech",
        description="Convert text to speech with Microsoft Edge TTS and save the audio to a file. "
                    "Text comes from --text, --file or standard input.",
        allow_abbrev=False,
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--text", help="Text to convert to speech.")
    source.add_argument("-f", "--file", help="UTF-8 text file to read the text from.")
    parser.add_argument("-w", "--output", help="Output audio file path (e.g., speech.mp3).")

    parser.add_argument("-v", "--voice", help=f"Voice identifier (default: {DEFAULT_VOICE}).")
    parser.add_argument("-r", "--rate", help="Relative speech rate, e.g. +10%% (default: +0%%).")
    parser.add_argument("-u", "--volume", help="Relative volume, e.g. -20%% (default: +0%%).")

    parser.add_argument("--strip-markdown", action="store_true",
                        help="Strip Markdown formatting from the input text.")
    parser.add_argument("--proxy", help="HTTP proxy for the TTS connection.")
    parser.add_argument("--play-audio", action="store_true",
                        help="Play the saved audio after synthesis.")
    return parser


def parse_args(argv: Sequence[str], parser: Optional[argparse.ArgumentParser] = None) -> argparse.Namespace:
    """Parse the command line into a namespace; exits with status 1 on usage errors."""
    parser = parser or create_parser()
    return parser.parse_args(normalize_argv(argv))


def stdin_is_piped(stdin: Optional[TextIO]) -> bool:
    return stdin is not None and not stdin.isatty()


def resolve_text(args: argparse.Namespace, stdin: Optional[TextIO] = None) -> Optional[str]:
    """Return the text to synthesize from --text, --file or piped stdin."""
    if args.file:
        text = load_text(Path(args.file))
    elif args.text is not None:
        text = args.text
    elif stdin_is_piped(stdin):
        text = stdin.read()
    else:
        return None
    return clean_markdown(text) if args.strip_markdown else text


# ----------------------------
# Main application logic
# ----------------------------
def main(argv: Optional[Sequence[str]] = None, synthesize: Optional[Synthesizer] = None):
    """Main entry point for the text2speech CLI application."""
    parser = create_parser()
    args = parse_args(sys.argv[1:] if argv is None else argv, parser)

    if args.file and stdin_is_piped(sys.stdin):
        parser.error("cannot use both --file and stdin for input")

    try:
        text = resolve_text(args, sys.stdin)
        if not text or not args.output:
            raise MissingParameterError()
        request = build_request(text, voice=args.voice, rate=args.rate, volume=args.volume)
        if synthesize is None:
            synthesize = functools.partial(edge_synthesize, proxy=args.proxy)

        with progress_context(f"Synthesizing speech ({request.voice})..."):
            out_path = asyncio.run(synthesize_to_file(request, args.output, synthesize))
    except MissingParameterError as e:
        print(e, file=sys.stderr)
        sys.exit(EXIT_FAILURE)
    except Exception as e:
        print(f"{type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(EXIT_FAILURE)

    print(f"Saved audio to: {out_path}")
    if args.play_audio:
        play_audio_file(out_path)
