"""Package entry point for ``python -m gloss_converter``.

WHY: Users run the converter as ``python -m gloss_converter request.json``
for CLI mode, or ``python -m gloss_converter --serve`` for the HTTP API.

HOW: Checks sys.argv for the ``--serve`` flag. If present, starts the
FastAPI app under uvicorn. Otherwise, delegates to the CLI's main().
"""

import sys

if __name__ == "__main__":
    if "--serve" in sys.argv:
        from gloss_converter.server.app import run_api
        run_api()
    else:
        from gloss_converter.cli import main
        main()
