"""Unified command-line interface for the shelflife project.

Usage:
    shelflife parse <text-file|->
    shelflife parse <text-file|-> --json
    shelflife lines <text-file|->
    shelflife scan <image> [--ocr-url URL]
    shelflife serve [--host] [--port]
"""
