#!/usr/bin/env python3
"""
Hero Battle - turn-based two-team battle engine.

Thin wrapper around the CLI demo. The engine lives in the herobattle package:
- battle/ (roster, damage, intents, hazards, turn resolution, log)
- system/ (settings)
- ui/ (rich rendering)

To run: python main.py [config.json] [--random] [--seed N]
"""

from herobattle.cli import main

if __name__ == "__main__":
    main()
