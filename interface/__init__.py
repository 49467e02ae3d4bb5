"""
Interface package: text front-ends for the chess engine.

Modules:
    cli: Interactive game against the engine on stdin/stdout.
         Run with: python -m interface.cli
    uci: Universal Chess Interface (UCI) protocol handler.
         Reads commands from stdin, writes responses to stdout.
         Run with: python -m interface.uci
"""
