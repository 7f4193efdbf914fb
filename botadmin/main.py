"""Entry point: delegates to CLI app (serve, validate-config)."""

from rich.traceback import install

from botadmin.cli import app

if __name__ == "__main__":
    install(show_locals=False, max_frames=5, word_wrap=True)
    app()
