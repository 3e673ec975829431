from __future__ import annotations


class BlockBlastError(Exception):
    """Base class for engine errors."""


class ConfigError(BlockBlastError, ValueError):
    pass


class UnknownPieceError(BlockBlastError, KeyError):
    def __init__(self, piece_id: int) -> None:
        super().__init__(piece_id)
        self.piece_id = piece_id

    def __str__(self) -> str:
        return f"piece {self.piece_id} is not in the tray"


class PieceAlreadyUsedError(BlockBlastError):
    def __init__(self, piece_id: int) -> None:
        super().__init__(f"piece {piece_id} has already been placed")
        self.piece_id = piece_id


class HintsDisabledError(BlockBlastError):
    pass


class UnknownRewardError(BlockBlastError, KeyError):
    def __init__(self, kind: str) -> None:
        super().__init__(kind)
        self.kind = kind

    def __str__(self) -> str:
        return f"no coin reward configured for {self.kind!r}"
