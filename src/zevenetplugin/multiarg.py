from typing import Iterator, Optional, Union

from .range import Range


class MultiArg:
    """Comma-separated command line argument, e.g. the load thresholds
    ``-w 2,1.5,1``.

    Indexing past the end returns the last element, so ``-w 2`` applies
    the same threshold to every position.
    """

    args: list[str]

    def __init__(self, args: Union[list[str], str]) -> None:
        if isinstance(args, list):
            self.args = args
        elif args == "":
            self.args = []
        else:
            self.args = [arg.strip() for arg in args.split(",")]

    def __len__(self) -> int:
        return len(self.args)

    def __iter__(self) -> Iterator[str]:
        return iter(self.args)

    def __getitem__(self, key: int) -> Optional[str]:
        try:
            return self.args[key]
        except IndexError:
            pass
        try:
            return self.args[-1]
        except IndexError:
            return None

    def ranges(self, count: int) -> tuple[Range, ...]:
        """Parses the first `count` elements into threshold ranges.

        :raises ValueError: if an element is not a valid range or there
            are more than `count` elements
        """
        if len(self) > count:
            raise ValueError(
                "expected at most {0} comma-separated values, got {1}".format(
                    count, len(self)
                )
            )
        return tuple(Range(self[index]) for index in range(count))
