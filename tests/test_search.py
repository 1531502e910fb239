"""Tests for the minimax search."""

import asyncio
import logging
import random

import chess
import pytest

import engine.search
from engine.constants import CHECKMATE_SCORE
from engine.evaluate import evaluate
from engine.rules import game_status
from engine.search import find_best_move

MATE_IN_ONE_WHITE = "6k1/8/6K1/8/8/8/8/R7 w - - 0 1"
MATE_IN_ONE_BLACK = "r7/8/8/8/8/6k1/8/6K1 b - - 0 1"

POSITIONS = [
    chess.STARTING_FEN,
    "rnbqkbnr/pppp1ppp/8/4p3/4P3/8/PPPP1PPP/RNBQKBNR w KQkq e6 0 2",
    "rnbqkbnr/pppp1ppp/8/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R b KQkq - 1 2",
    "rnbqkbnr/pp1ppppp/8/2p5/4P3/8/PPPP1PPP/RNBQKBNR w KQkq c6 0 2",
    "r1bqk1nr/pppp1ppp/2n5/2b1p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4",
    "r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4",
    "r2q1rk1/ppp2ppp/2np1n2/2b1p1B1/2B1P1b1/2NP1N2/PPP2PPP/R2Q1RK1 w - - 0 8",
    "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
    "rnbqkbnr/ppp1p1pp/8/3pPp2/8/8/PPPP1PPP/RNBQKBNR w KQkq f6 0 3",
    "rnbqk1nr/pppp1ppp/8/4p3/1b1P4/8/PPP1PPPP/RNBQKBNR w KQkq - 1 3",
    "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1",
    "8/5pk1/6p1/7p/7P/6P1/5PK1/8 w - - 0 1",
    "8/1p4k1/p7/P1K5/8/8/8/8 w - - 0 1",
    "8/8/3k4/8/8/3K4/3Q4/7r w - - 0 1",
    "1r5k/P7/8/8/8/8/8/K7 w - - 0 1",
    "4k3/8/8/8/8/8/4P3/4K3 w - - 0 1",
    "8/8/6P1/7k/8/8/8/K7 b - - 0 1",
    MATE_IN_ONE_WHITE,
    MATE_IN_ONE_BLACK,
    "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3",
    "7k/5Q2/6K1/8/8/8/8/8 b - - 0 1",
]

SMALL_POSITIONS = [
    "8/1p4k1/p7/P1K5/8/8/8/8 w - - 0 1",
    "4k3/8/8/8/8/8/4P3/4K3 w - - 0 1",
    "8/8/6P1/7k/8/8/8/K7 b - - 0 1",
    "8/8/3k4/8/8/3K4/3Q4/7r w - - 0 1",
    MATE_IN_ONE_WHITE,
]


def _search(board: chess.Board, depth: int, seed: int = 0, **kwargs):
    return asyncio.run(find_best_move(board, depth, rng=random.Random(seed), **kwargs))


def _full_width(board: chess.Board, depth: int, maximizing: bool, engine_color: chess.Color) -> float:
    """Reference minimax without pruning."""
    if depth == 0 or game_status(board) is not None:
        return evaluate(board, engine_color)
    values = []
    for move in list(board.legal_moves):
        board.push(move)
        values.append(_full_width(board, depth - 1, not maximizing, engine_color))
        board.pop()
    if not values:
        return evaluate(board, engine_color)
    return max(values) if maximizing else min(values)


def _root_values(board: chess.Board, depth: int) -> dict[chess.Move, float]:
    engine_color = board.turn
    values = {}
    for move in list(board.legal_moves):
        board.push(move)
        values[move] = _full_width(board, depth - 1, False, engine_color)
        board.pop()
    return values


class TestBasics:
    def test_returns_legal_move_from_start(self) -> None:
        board = chess.Board()
        move, score, depth, nodes = _search(board, 2)

        assert move in board.legal_moves
        assert depth == 2
        assert nodes > 0
        assert score > -CHECKMATE_SCORE

    @pytest.mark.parametrize(
        "fen",
        [
            "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3",
            "7k/5Q2/6K1/8/8/8/8/8 b - - 0 1",
        ],
    )
    def test_no_legal_moves_returns_none(self, fen: str) -> None:
        assert _search(chess.Board(fen), 3) == (None, 0, 0, 0)

    def test_rejects_depth_below_one(self) -> None:
        with pytest.raises(ValueError):
            _search(chess.Board(), 0)

    def test_finds_mate_in_one_for_white(self) -> None:
        board = chess.Board(MATE_IN_ONE_WHITE)
        move, score, _, _ = _search(board, 2)

        assert move == chess.Move.from_uci("a1a8")
        assert score == CHECKMATE_SCORE
        board.push(move)
        assert evaluate(board, chess.WHITE) == CHECKMATE_SCORE

    def test_finds_mate_in_one_for_black(self) -> None:
        board = chess.Board(MATE_IN_ONE_BLACK)
        move, score, _, _ = _search(board, 2)

        assert move == chess.Move.from_uci("a8a1")
        assert score == CHECKMATE_SCORE
        board.push(move)
        assert evaluate(board, chess.BLACK) == CHECKMATE_SCORE

    def test_deeper_search_still_sees_the_mate(self) -> None:
        board = chess.Board(MATE_IN_ONE_WHITE)
        move, score, _, _ = _search(board, 3)
        assert move in board.legal_moves
        assert score == CHECKMATE_SCORE

    def test_wins_hanging_queen(self) -> None:
        board = chess.Board("4k3/8/8/3q4/8/8/8/3RK3 w - - 0 1")
        move, _, _, _ = _search(board, 2)
        assert move == chess.Move.from_uci("d1d5")

    def test_same_seed_same_move(self) -> None:
        board = chess.Board(POSITIONS[5])
        assert _search(board, 2, seed=9) == _search(board, 2, seed=9)


class TestBoardRestored:
    @pytest.mark.parametrize("fen", POSITIONS)
    @pytest.mark.parametrize("depth", [1, 2])
    def test_position_unchanged(self, fen: str, depth: int) -> None:
        board = chess.Board(fen)
        before = (board.fen(), list(board.move_stack))

        move, _, _, _ = _search(board, depth)

        assert (board.fen(), list(board.move_stack)) == before
        assert (move is None) == (not any(board.legal_moves))
        if move is not None:
            assert move in board.legal_moves

    @pytest.mark.search_slow
    @pytest.mark.parametrize("fen", POSITIONS)
    @pytest.mark.parametrize("depth", [3, 4])
    def test_position_unchanged_deep(self, fen: str, depth: int) -> None:
        board = chess.Board(fen)
        before = (board.fen(), list(board.move_stack))
        _search(board, depth)
        assert (board.fen(), list(board.move_stack)) == before

    def test_history_is_preserved(self) -> None:
        board = chess.Board()
        for uci in ["e2e4", "e7e5", "g1f3"]:
            board.push_uci(uci)
        stack = list(board.move_stack)

        _search(board, 2)

        assert board.move_stack == stack

    def test_failure_unwinds_all_moves(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls = 0

        def exploding_evaluate(board: chess.Board, engine_color: chess.Color) -> float:
            nonlocal calls
            calls += 1
            if calls == 25:
                raise RuntimeError("evaluator blew up")
            return evaluate(board, engine_color)

        monkeypatch.setattr(engine.search, "evaluate", exploding_evaluate)
        board = chess.Board(POSITIONS[4])
        fen = board.fen()

        with pytest.raises(RuntimeError, match="blew up"):
            _search(board, 3)

        assert board.fen() == fen
        assert board.move_stack == []


class TestAlphaBetaEquivalence:
    @pytest.mark.parametrize("fen", SMALL_POSITIONS)
    @pytest.mark.parametrize("depth", [1, 2])
    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_matches_full_width_value(self, fen: str, depth: int, seed: int) -> None:
        board = chess.Board(fen)
        move, score, _, _ = _search(board, depth, seed=seed)

        values = _root_values(board, depth)
        best = max(values.values())
        assert values[move] == pytest.approx(best)
        assert score == pytest.approx(best)

    @pytest.mark.parametrize("fen", SMALL_POSITIONS[:3])
    def test_matches_full_width_value_depth_three(self, fen: str) -> None:
        board = chess.Board(fen)
        move, score, _, _ = _search(board, 3, seed=11)

        values = _root_values(board, 3)
        assert values[move] == pytest.approx(max(values.values()))
        assert score == pytest.approx(max(values.values()))

    def test_pruning_visits_fewer_nodes(self) -> None:
        board = chess.Board(SMALL_POSITIONS[3])
        _, _, _, nodes = _search(board, 3)

        leaves = 0
        for move in list(board.legal_moves):
            board.push(move)
            for reply in list(board.legal_moves):
                board.push(reply)
                leaves += board.legal_moves.count()
                board.pop()
            board.pop()
        assert nodes < leaves


class TestCooperativeYielding:
    def test_yielding_does_not_change_result(self) -> None:
        board = chess.Board(POSITIONS[11])
        with_yields = _search(board, 3, seed=7)
        without_yields = _search(board, 3, seed=7, yield_every=None)
        assert with_yields == without_yields

    def test_frequent_yielding_does_not_change_result(self) -> None:
        board = chess.Board(POSITIONS[13])
        assert _search(board, 3, seed=4, yield_every=1) == _search(board, 3, seed=4, yield_every=None)

    @staticmethod
    async def _search_beside_ticker(board: chess.Board, yield_every: int | None) -> int:
        ticks = 0
        done = False

        async def ticker() -> None:
            nonlocal ticks
            while not done:
                ticks += 1
                await asyncio.sleep(0)

        task = asyncio.create_task(ticker())
        await find_best_move(board, 2, rng=random.Random(0), yield_every=yield_every)
        ticks_during_search = ticks
        done = True
        await task
        return ticks_during_search

    def test_yielding_lets_other_tasks_run(self) -> None:
        board = chess.Board(POSITIONS[12])
        assert asyncio.run(self._search_beside_ticker(board, 10)) > 0

    def test_no_yielding_blocks_other_tasks(self) -> None:
        board = chess.Board(POSITIONS[12])
        assert asyncio.run(self._search_beside_ticker(board, None)) == 0


class _RejectingBoard(chess.Board):
    rejected = chess.Move.from_uci("a1a8")

    def is_legal(self, move: chess.Move) -> bool:
        return move != self.rejected and super().is_legal(move)


def test_refused_move_is_skipped(caplog: pytest.LogCaptureFixture) -> None:
    board = _RejectingBoard(MATE_IN_ONE_WHITE)

    with caplog.at_level(logging.WARNING, logger="engine.search"):
        move, score, _, _ = _search(board, 2)

    assert move is not None
    assert move != chess.Move.from_uci("a1a8")
    assert score < CHECKMATE_SCORE
    assert board.fen() == MATE_IN_ONE_WHITE
    assert any("skipping branch" in record.getMessage() for record in caplog.records)
