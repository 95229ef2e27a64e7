import logging
import os
import sys

from treelox.lox import Lox

# sysexits.h
EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70


def configure_logging() -> None:
    level = os.environ.get("TREELOX_LOG_LEVEL")
    if level:
        logging.basicConfig(
            level=level.upper(),
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv

    configure_logging()

    if len(argv) > 2:
        print(f"Usage: {argv[0]} [script]", file=sys.stderr)
        return EX_USAGE

    lox = Lox()

    if len(argv) == 2:
        try:
            lox.run_file(argv[1])
        except (OSError, UnicodeDecodeError) as error:
            print(f"Error reading file: {error}", file=sys.stderr)
            return EX_NOINPUT

        if lox.had_error:
            return EX_DATAERR
        if lox.had_runtime_error:
            return EX_SOFTWARE
    else:
        lox.run_prompt()

    return 0


if __name__ == "__main__":
    sys.exit(main())
