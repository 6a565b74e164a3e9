"""CLI frontend for creator_studio.

Commands:
    creator-studio automate   Run the full content pipeline for a topic
    creator-studio video      Generate a video and save it to a file
    creator-studio generate   Run a single generation
    creator-studio trending   List trending video topics

Example:
    $ export GEMINI_API_KEY=...
    $ creator-studio automate "review of a new laptop"
    $ creator-studio video "a timelapse of a city at night" -o city.mp4
"""

from creator_studio.frontends.cli.main import cli, main

__all__ = ["cli", "main"]
