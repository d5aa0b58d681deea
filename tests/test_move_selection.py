import random

import pytest

from reversi_ai.enums import Color
from reversi_ai.error_handling import NoLegalMoveError
from reversi_ai.inference.mcts import MCTSResult, MonteCarloTreeSearch
from reversi_ai.inference.mcts_config import MCTSConfig
from reversi_ai.inference.move_selection import (
    AlphaBetaStrategy,
    BackgroundSearch,
    MCTSStrategy,
    MoveSelectionStrategy,
    RandomStrategy,
    get_strategy,
    list_available_strategies,
)


def finished_state(must_pass_state):
    return must_pass_state.apply_move((0, 2), Color.BLACK).apply_move((2, 2), Color.BLACK)


class TestRegistry:
    def test_list_available_strategies(self):
        assert set(list_available_strategies()) == {"alpha_beta", "mcts", "random"}

    def test_get_strategy_builds_fresh_instances(self):
        a = get_strategy("random")
        b = get_strategy("random")
        assert isinstance(a, RandomStrategy)
        assert a is not b

    def test_get_strategy_forwards_kwargs(self):
        strategy = get_strategy("alpha_beta", depth=2, evaluator="composite")
        assert isinstance(strategy, AlphaBetaStrategy)
        assert strategy.get_config_summary() == "alpha_beta(depth=2, eval=composite)"

    def test_unknown_strategy(self):
        with pytest.raises(ValueError, match="Unknown strategy"):
            get_strategy("minimax")


class TestAlphaBetaStrategy:
    def test_selects_legal_move(self, small_state):
        strategy = AlphaBetaStrategy(depth=2)
        assert isinstance(strategy, MoveSelectionStrategy)
        assert strategy.select_move(small_state) in small_state.legal_moves()
        assert strategy.get_name() == "alpha_beta"

    def test_plays_for_side_to_move(self, small_state):
        state = small_state.apply_move((1, 2), Color.BLACK)
        move = AlphaBetaStrategy(depth=1).select_move(state)
        assert move in state.all_moves(Color.WHITE)

    def test_invalid_evaluator(self):
        with pytest.raises(ValueError):
            AlphaBetaStrategy(depth=2, evaluator="nonexistent")

    def test_finished_game(self, must_pass_state):
        with pytest.raises(NoLegalMoveError):
            AlphaBetaStrategy(depth=2).select_move(finished_state(must_pass_state))


class TestMCTSStrategy:
    def test_selects_legal_move(self, small_state):
        strategy = MCTSStrategy(time_limit_s=5.0, rng=random.Random(1), max_iterations=50)
        move = strategy.select_move(small_state)
        assert move in small_state.legal_moves()
        assert strategy.last_result.simulations == 50
        assert strategy.last_result.best_move == move
        assert strategy.get_name() == "mcts"
        assert "max_iter=50" in strategy.get_config_summary()

    def test_engine_persists_and_reroots(self, small_state):
        strategy = MCTSStrategy(time_limit_s=5.0, rng=random.Random(2), max_iterations=200)
        move = strategy.select_move(small_state)
        engine = strategy.engine

        after_black = small_state.apply_move(move, Color.BLACK)
        reply = after_black.legal_moves()[0]
        after_white = after_black.apply_move(reply, Color.WHITE)
        strategy.select_move(after_white)

        assert strategy.engine is engine
        assert engine.starting_state == after_white
        # Tree reuse carries plays from the previous turn
        assert strategy.last_result.simulations >= 200

    def test_color_change_rebuilds_engine(self, small_state):
        strategy = MCTSStrategy(time_limit_s=5.0, rng=random.Random(3), max_iterations=20)
        move = strategy.select_move(small_state)
        engine = strategy.engine
        strategy.select_move(small_state.apply_move(move, Color.BLACK))
        assert strategy.engine is not engine
        assert strategy.engine.color is Color.WHITE

    def test_reset(self, small_state):
        strategy = MCTSStrategy(time_limit_s=5.0, rng=random.Random(4), max_iterations=10)
        strategy.select_move(small_state)
        strategy.reset()
        assert strategy.engine is None
        assert strategy.last_result is None

    def test_invalid_arguments(self):
        with pytest.raises(ValueError):
            MCTSStrategy(time_limit_s=0)
        with pytest.raises(ValueError):
            MCTSStrategy(max_iterations=0)

    def test_uses_config_think_time_by_default(self):
        strategy = MCTSStrategy(config=MCTSConfig(think_time_s=0.25))
        assert strategy.time_limit_s == 0.25

    def test_finished_game(self, must_pass_state):
        with pytest.raises(NoLegalMoveError):
            MCTSStrategy(max_iterations=5).select_move(finished_state(must_pass_state))


class TestRandomStrategy:
    def test_selects_legal_move(self, initial_state, rng):
        strategy = RandomStrategy(rng)
        for _ in range(20):
            assert strategy.select_move(initial_state) in initial_state.legal_moves()

    def test_seeded(self, initial_state):
        a = [RandomStrategy(random.Random(9)).select_move(initial_state) for _ in range(5)]
        b = [RandomStrategy(random.Random(9)).select_move(initial_state) for _ in range(5)]
        assert a == b

    def test_finished_game(self, must_pass_state):
        with pytest.raises(NoLegalMoveError):
            RandomStrategy().select_move(finished_state(must_pass_state))


class TestBackgroundSearch:
    def test_submit_returns_future(self, small_state):
        search = MonteCarloTreeSearch(small_state, Color.BLACK, MCTSConfig(), random.Random(5))
        with BackgroundSearch(search) as background:
            future = background.submit(small_state, time_limit_s=0.05)
            result = future.result(timeout=10)
        assert isinstance(result, MCTSResult)
        assert result.simulations > 0
        assert result.best_move in small_state.legal_moves()

    def test_interim_results_from_worker(self, small_state):
        cfg = MCTSConfig(interim_interval_s=0.0)
        search = MonteCarloTreeSearch(small_state, Color.BLACK, cfg, random.Random(6))
        snapshots = []
        with BackgroundSearch(search) as background:
            background.submit(small_state, time_limit_s=0.05, on_interim=snapshots.append).result(timeout=10)
        assert snapshots
        assert all(isinstance(s, MCTSResult) for s in snapshots)
