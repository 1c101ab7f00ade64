#!/usr/bin/env python3
"""
BetterPR
Lists open Bitbucket pull requests ordered by what needs your attention.
"""

from better_pr.cli import main


if __name__ == "__main__":
    main()
