#!/usr/bin/env python3
"""Main CLI entry point for Audio Info."""

from audio_info.cli import cli


if __name__ == '__main__':
    cli()
