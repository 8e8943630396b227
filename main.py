from rich.console import Console

from flagpole import *

console = Console()


def main(argv=None):
    num = Slot(1)
    goodbye = Slot(False)

    with FlagParser("cli-example", "A small program to show off as an example for flagpole") as parser:
        parser.add_flag(Kind.I32, "-n", "--num", "Number of times to say hello", num)
        parser.add_flag(bool, "-g", "--print-goodbye", "Should we also print goodbye?", goodbye)
        parser.run(argv)

    for _ in range(abs(num.value)):
        console.print("Hello!")
    if goodbye.value:
        console.print("Goodbye!")


if __name__ == '__main__':
    main()
