import sys

from rich.pretty import pprint

from argser import *

__prog__ = "main.py"

USAGE = """
Usage:  main.py [command] [options]
        main.py --help

An example command line utility.

Options:
  -f, --foo <string>  A string valued option.
  -b, --bar <number>  A repeatable number valued option.
  --help              Display this help message.

Commands:
  zip   An example command.
  zap   A second example command.
""".strip()


def main(argv=None):
    name, args = command(sys.argv[1:] if argv is None else argv, "zip", "zap")
    options, error = parse(args, {
        "help": False,  # Equivalent to {"value": False}
        "foo": {"value": True, "alias": "f"},
        "bar": {"value": int, "many": True, "alias": "b"},
    })

    if options.help or error:
        print(USAGE, file=sys.stderr)
        if error:
            print(file=sys.stderr)
            trigger(error, shell=True)
        return

    pprint({"command": name, "options": dict(options)})


if __name__ == '__main__':
    main()
