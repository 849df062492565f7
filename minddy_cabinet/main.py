"""Entry point: ``python -m minddy_cabinet.main`` or ``minddy-cabinet``."""

from .presentation.cli import main


if __name__ == "__main__":
    main()
