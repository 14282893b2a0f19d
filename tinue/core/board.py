from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Optional, Tuple

from tinue.core.types import (
    RESERVES,
    Color,
    Direction,
    GameResult,
    Move,
    Piece,
    Role,
    check_board_size,
    move_from_ptn,
)
from tinue.errors import ContractViolationError, InvalidMoveError


@dataclass(slots=True)
class MoveUndo:
    move: Move
    side_to_move: Color
    ply: int
    flattened: bool = False


def _compositions(total: int, parts: int) -> Iterator[Tuple[int, ...]]:
    """Ordered ways of writing ``total`` as ``parts`` positive integers."""
    if parts == 0:
        if total == 0:
            yield ()
        return
    if parts == 1:
        if total >= 1:
            yield (total,)
        return
    for first in range(1, total - parts + 2):
        for rest in _compositions(total - first, parts - 1):
            yield (first,) + rest


def _drop_sequences(carry: int, max_squares: int) -> Iterator[Tuple[int, ...]]:
    for taken in range(1, carry + 1):
        for squares in range(1, min(taken, max_squares) + 1):
            yield from _compositions(taken, squares)


class Board:
    """
    Tak position. Each square holds a stack of pieces, bottom first.
    """

    def __init__(self, size: int = 5) -> None:
        self.size: int = check_board_size(size)
        stones, caps = RESERVES[size]
        self.stacks: List[List[Piece]] = [[] for _ in range(size * size)]
        self.stones: List[int] = [stones, stones]
        self.caps: List[int] = [caps, caps]
        self.side_to_move: Color = Color.WHITE
        self.ply: int = 0

    @staticmethod
    def from_startpos(size: int = 5) -> "Board":
        return Board(size)

    @staticmethod
    def from_ptn_moves(size: int, moves: Iterable[str]) -> "Board":
        b = Board(size)
        for text in moves:
            b.play(b.move_from_ptn(text))
        return b

    def copy(self) -> "Board":
        b = Board(self.size)
        b.stacks = [stack[:] for stack in self.stacks]
        b.stones = self.stones[:]
        b.caps = self.caps[:]
        b.side_to_move = self.side_to_move
        b.ply = self.ply
        return b

    def top(self, sq: int) -> Optional[Piece]:
        stack = self.stacks[sq]
        return stack[-1] if stack else None

    def _neighbor(self, sq: int, direction: Direction) -> Optional[int]:
        rank, file = divmod(sq, self.size)
        dr, df = direction.step()
        r = rank + dr
        f = file + df
        if 0 <= r < self.size and 0 <= f < self.size:
            return r * self.size + f
        return None

    def _path(self, sq: int, direction: Direction, length: int) -> List[int]:
        path = []
        for _ in range(length):
            nxt = self._neighbor(sq, direction)
            if nxt is None:
                raise ContractViolationError("spread runs off the board")
            path.append(nxt)
            sq = nxt
        return path

    def _placed_color(self) -> Color:
        # Opening swap: each player's first stone belongs to the opponent.
        if self.ply < 2:
            return self.side_to_move.other()
        return self.side_to_move

    def _free_run(self, sq: int, direction: Direction, is_cap: bool) -> Tuple[int, bool]:
        """Squares a spread may cover before a blocker, and whether a lone cap can crush it."""
        run = 0
        nxt = self._neighbor(sq, direction)
        while nxt is not None:
            top = self.top(nxt)
            if top is not None and top[1] != Role.FLAT:
                return run, is_cap and top[1] == Role.WALL
            run += 1
            nxt = self._neighbor(nxt, direction)
        return run, False

    def generate_legal(self) -> List[Move]:
        moves: List[Move] = []

        if self.ply < 2:
            for sq, stack in enumerate(self.stacks):
                if not stack:
                    moves.append(Move.place(Role.FLAT, sq))
            return moves

        color = self.side_to_move
        has_stones = self.stones[color] > 0
        has_caps = self.caps[color] > 0
        for sq, stack in enumerate(self.stacks):
            if stack:
                continue
            if has_stones:
                moves.append(Move.place(Role.FLAT, sq))
                moves.append(Move.place(Role.WALL, sq))
            if has_caps:
                moves.append(Move.place(Role.CAP, sq))

        for sq, stack in enumerate(self.stacks):
            if not stack or stack[-1][0] != color:
                continue
            carry = min(len(stack), self.size)
            is_cap = stack[-1][1] == Role.CAP
            for direction in Direction:
                run, crush = self._free_run(sq, direction, is_cap)
                for drops in _drop_sequences(carry, run):
                    moves.append(Move.spread(sq, direction, drops))
                if crush:
                    # The cap has to arrive alone, after one drop on each free square.
                    for taken in range(run + 1, carry + 1):
                        for prefix in _compositions(taken - 1, run):
                            moves.append(Move.spread(sq, direction, prefix + (1,)))

        return moves

    def make_move(self, move: Move) -> MoveUndo:
        undo = MoveUndo(move=move, side_to_move=self.side_to_move, ply=self.ply)

        if move.role is not None:
            stack = self.stacks[move.square]
            if stack:
                raise ContractViolationError(f"placement on occupied square {self.move_to_ptn(move)}")
            owner = self._placed_color()
            if move.role == Role.CAP:
                self.caps[owner] -= 1
            else:
                self.stones[owner] -= 1
            stack.append((owner, move.role))
        else:
            origin = self.stacks[move.square]
            taken = move.pieces_taken
            if not (0 < taken <= min(len(origin), self.size)):
                raise ContractViolationError(f"cannot carry {taken} pieces in {self.move_to_ptn(move)}")
            path = self._path(move.square, move.direction, len(move.drops))

            carried = origin[-taken:]
            del origin[-taken:]
            for sq, drop in zip(path, move.drops):
                target = self.stacks[sq]
                if target and target[-1][1] == Role.WALL:
                    target[-1] = (target[-1][0], Role.FLAT)
                    undo.flattened = True
                target.extend(carried[:drop])
                carried = carried[drop:]

        self.side_to_move = self.side_to_move.other()
        self.ply += 1
        return undo

    def unmake_move(self, undo: MoveUndo) -> None:
        if undo.ply != self.ply - 1:
            raise ContractViolationError(
                f"undo for ply {undo.ply} applied at ply {self.ply}; moves must be undone in reverse order"
            )
        move = undo.move
        self.side_to_move = undo.side_to_move
        self.ply = undo.ply

        if move.role is not None:
            owner, role = self.stacks[move.square].pop()
            if role == Role.CAP:
                self.caps[owner] += 1
            else:
                self.stones[owner] += 1
            return

        path = self._path(move.square, move.direction, len(move.drops))
        carried: List[Piece] = []
        for sq, drop in zip(reversed(path), reversed(move.drops)):
            stack = self.stacks[sq]
            carried[:0] = stack[-drop:]
            del stack[-drop:]
        if undo.flattened:
            last = self.stacks[path[-1]]
            last[-1] = (last[-1][0], Role.WALL)
        self.stacks[move.square].extend(carried)

    def play(self, move: Move) -> MoveUndo:
        """Apply ``move`` after checking that it is legal here."""
        if self.game_result() is not None:
            raise InvalidMoveError(f"game is over, cannot play {self.move_to_ptn(move)}")
        if move not in self.generate_legal():
            raise InvalidMoveError(f"illegal move {self.move_to_ptn(move)} at ply {self.ply}")
        return self.make_move(move)

    def _connects(self, owned: List[bool], starts: Iterable[int], is_goal: Callable[[int], bool]) -> bool:
        seen = set()
        frontier = [sq for sq in starts if owned[sq]]
        while frontier:
            sq = frontier.pop()
            if sq in seen:
                continue
            seen.add(sq)
            if is_goal(sq):
                return True
            for direction in Direction:
                nxt = self._neighbor(sq, direction)
                if nxt is not None and owned[nxt] and nxt not in seen:
                    frontier.append(nxt)
        return False

    def has_road(self, color: Color) -> bool:
        size = self.size
        owned = [
            bool(stack) and stack[-1][0] == color and stack[-1][1] != Role.WALL
            for stack in self.stacks
        ]
        if self._connects(owned, range(size), lambda sq: sq // size == size - 1):
            return True
        return self._connects(owned, range(0, size * size, size), lambda sq: sq % size == size - 1)

    def flat_counts(self) -> Tuple[int, int]:
        white = black = 0
        for stack in self.stacks:
            if stack and stack[-1][1] == Role.FLAT:
                if stack[-1][0] == Color.WHITE:
                    white += 1
                else:
                    black += 1
        return white, black

    def game_result(self) -> Optional[GameResult]:
        if self.ply == 0:
            return None

        white_road = self.has_road(Color.WHITE)
        black_road = self.has_road(Color.BLACK)
        if white_road and black_road:
            # Both roads completed by one move: the mover wins.
            return GameResult.win_for(self.side_to_move.other())
        if white_road:
            return GameResult.WHITE_WIN
        if black_road:
            return GameResult.BLACK_WIN

        out_of_pieces = any(self.stones[c] + self.caps[c] == 0 for c in Color)
        if out_of_pieces or all(self.stacks):
            white, black = self.flat_counts()
            if white > black:
                return GameResult.WHITE_WIN
            if black > white:
                return GameResult.BLACK_WIN
            return GameResult.DRAW
        return None

    def heuristic_score(self, move: Move) -> float:
        """
        Cheap ordering score, higher first. Only affects search speed.
        """
        color = self.side_to_move
        own = theirs = 0
        if move.role is not None:
            for direction in Direction:
                nxt = self._neighbor(move.square, direction)
                top = self.top(nxt) if nxt is not None else None
                if top is None:
                    continue
                if top[0] == color:
                    own += 1
                else:
                    theirs += 1
            if move.role == Role.FLAT:
                return 1.0 + 0.5 * own + 0.1 * theirs
            if move.role == Role.CAP:
                return 0.8 + 0.4 * own + 0.3 * theirs
            return 0.2 + 0.3 * theirs

        score = 0.4 + 0.1 * move.pieces_taken
        last = self._path(move.square, move.direction, len(move.drops))[-1]
        top = self.top(last)
        if top is not None and top[1] == Role.WALL:
            score += 1.0
        return score

    def is_wall_placement(self, move: Move) -> bool:
        return move.role == Role.WALL

    def move_to_ptn(self, move: Move) -> str:
        return move.ptn(self.size)

    def move_from_ptn(self, text: str) -> Move:
        return move_from_ptn(text, self.size)
