"""
UI module for text2speech package.

Contains the synthesis spinner and audio playback of the written file.
"""

import shutil
import subprocess
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

# Players tried in order, with the flags that keep them headless and quiet.
PLAYERS = {
    "darwin": [
        ["afplay"],
        ["ffplay", "-nodisp", "-autoexit", "-loglevel", "quiet"],
    ],
    "linux": [
        ["ffplay", "-nodisp", "-autoexit", "-loglevel", "quiet"],
        ["mpv", "--no-video", "--really-quiet"],
        ["mpg123", "-q"],
        ["play", "-q"],
    ],
}


@contextmanager
def progress_context(description: str):
    """
    Show a transient spinner with elapsed time while the block runs.

    Args:
        description: Task description shown next to the spinner

    Yields:
        The rich Progress instance
    """
    with Progress(
        SpinnerColumn(),
        TextColumn("{task.description}"),
        TimeElapsedColumn(),
        transient=True,
        console=Console(stderr=True),
    ) as progress:
        progress.add_task(description, total=None)
        yield progress


def select_player_cmd(audio_path: Path, platform: Optional[str] = None) -> Optional[List[str]]:
    """Return a player command line for audio_path, or None if no player is installed."""
    platform = platform or sys.platform
    key = "linux" if platform.startswith("linux") else platform
    for candidate in PLAYERS.get(key, []):
        if shutil.which(candidate[0]):
            return candidate + [str(audio_path)]
    return None


def play_audio_file(audio_path: Path) -> int:
    """
    Play an audio file using the first available system player.

    Returns:
        Return code from the player, 1 if no player was found
    """
    cmd = select_player_cmd(audio_path)
    if not cmd:
        print("No suitable audio player found for your OS. Skipping playback.", file=sys.stderr)
        return 1
    with progress_context(f"Playing audio with {cmd[0]}..."):
        return subprocess.call(cmd, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
