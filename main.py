#!/usr/bin/env python3
"""
Spellcaster - Main Entry Point
Voice and gesture spellcasting demo.
"""

import logging

from demo_spell_casting import main as run_demo


def main():
    """Main entry point for the spellcaster demo."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    run_demo()


if __name__ == "__main__":
    main()
