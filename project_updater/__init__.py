"""Project Updater -- interactive, staged project modification.

Collects the user's choices into a plan, asks for confirmation, then removes
and installs packages, generates files, edits the manifest and runs
verification tasks, isolating each step's failures and printing a final
report.
"""

__version__ = "0.1.0"
