"""Module entrypoint.

Allows:
    python -m log_channel
"""

from __future__ import annotations

from log_channel.server.log_server import main

if __name__ == "__main__":
    main()
