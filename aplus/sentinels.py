class Sentinel:
    def __init__(self, name: str) -> None:
        self._name = name

    def __bool__(self) -> bool:
        raise RuntimeError("Sentinels should not be used in boolean expressions.")

    def __repr__(self) -> str:
        return self._name


NOT_SET = Sentinel("NOT_SET")
