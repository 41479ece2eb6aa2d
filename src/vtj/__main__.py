"""Allow running vtj as ``python -m vtj``."""

from vtj.cli import main

main()
