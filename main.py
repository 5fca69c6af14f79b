"""
- File:     main.py
- Desc:     Entry point that launches the interactive signature key derivation shell
- Author:   Vasu Makadia
- License:  Apache License 2.0
"""


# Import required modules
import sys

# Import custom modules
from sigkey.shell.key_shell import main


if __name__ == "__main__":
    # Run the shell with command line arguments
    sys.exit(main())
