"""Entry point: delegates to the CLI app (serve, check-mail, init-db)."""

from rich.traceback import install

from rfp_desk.cli import app
from rfp_desk.utils.tracing import shutdown_tracing


def main() -> None:
    try:
        install(show_locals=False, max_frames=5, word_wrap=True)
        app()
    finally:
        shutdown_tracing()


if __name__ == "__main__":
    main()
