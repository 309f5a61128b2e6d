from __future__ import annotations

import unittest
from datetime import datetime, timezone
from unittest.mock import patch

from sqlalchemy import create_engine, inspect
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from keno.models import Base, Game, GameStatus
from keno.models import utils as model_utils
from keno.models.utils import generate_unique_game_id


class GameModelTestCase(unittest.TestCase):
    def setUp(self):
        self.engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(
            bind=self.engine, future=True, expire_on_commit=False
        )

    def tearDown(self):
        self.engine.dispose()

    def test_games_table_is_registered(self):
        self.assertIn("games", inspect(self.engine).get_table_names())

    def test_defaults(self):
        game = Game(game_id="game_defaults")
        self.assertEqual(game.status, "waiting")
        self.assertEqual(game.stake, 1.0)
        self.assertEqual(game.player_numbers, [])
        self.assertEqual(game.drawn_numbers, [])
        self.assertEqual(game.total_payout, 0.0)
        self.assertEqual(game.numbers_matched, 0)
        self.assertIsNotNone(game.created_at)

    def test_stake_is_clamped_on_assignment(self):
        self.assertEqual(Game(game_id="g1", stake=25).stake, 10.0)
        self.assertEqual(Game(game_id="g2", stake=0.01).stake, 0.1)
        game = Game(game_id="g3")
        game.stake = 3
        self.assertEqual(game.stake, 3.0)
        self.assertIsInstance(game.stake, float)

    def test_unknown_status_is_rejected(self):
        game = Game(game_id="g4")
        with self.assertRaises(ValueError):
            game.status = "cancelled"
        for status in GameStatus.ALL:
            game.status = status
            self.assertEqual(game.status, status)

    def test_number_lists_round_trip(self):
        with self.Session.begin() as session:
            game = Game(game_id="g5", player_id="p1")
            game.player_numbers = [3, 7, 11]
            game.drawn_numbers = list(range(1, 21))
            session.add(game)

        with self.Session() as session:
            stored = Game.get_by_game_id(session, "g5")
            assert stored is not None
            self.assertEqual(stored.player_numbers, [3, 7, 11])
            self.assertEqual(stored.drawn_numbers, list(range(1, 21)))
            self.assertEqual(stored.picks_count, 3)
            self.assertIsNotNone(stored.updated_at)

    def test_game_id_is_unique(self):
        with self.assertRaises(IntegrityError):
            with self.Session.begin() as session:
                session.add_all([Game(game_id="dup"), Game(game_id="dup")])

    def test_lookup_helpers(self):
        with self.Session.begin() as session:
            first = Game(game_id="a", player_id="p")
            second = Game(game_id="b", player_id="p", status=GameStatus.FINISHED)
            other = Game(game_id="c", player_id="q", status=GameStatus.READY)
            session.add_all([first, second, other])
            session.flush()

            self.assertIsNone(Game.get_by_game_id(session, "zzz"))
            self.assertEqual(
                [g.game_id for g in Game.find_by_player_id(session, "p")], ["a", "b"]
            )
            self.assertEqual(
                [g.game_id for g in Game.find_by_status(session, GameStatus.ACTIVE)],
                ["a", "c"],
            )

    def test_profit(self):
        game = Game(game_id="g6", stake=2.0)
        game.total_payout = 5.0
        self.assertEqual(game.profit, 3.0)

    def test_to_json(self):
        created = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        game = Game(game_id="g7", player_id="p7", stake=2.5, created_at=created)
        game.player_numbers = [1, 2]
        data = game.to_json()
        self.assertEqual(
            data,
            {
                "id": "g7",
                "player_id": "p7",
                "player_numbers": [1, 2],
                "drawn_numbers": [],
                "stake": 2.5,
                "total_payout": 0.0,
                "numbers_matched": 0,
                "status": "waiting",
                "created_at": "2024-01-02T03:04:05+00:00",
            },
        )
        data["player_numbers"].append(3)
        self.assertEqual(game.player_numbers, [1, 2])


class GameIdGenerationTestCase(unittest.TestCase):
    def test_format(self):
        game_id = generate_unique_game_id()
        self.assertTrue(game_id.startswith("game_"))
        self.assertEqual(len(game_id), len("game_") + 16)
        self.assertTrue(game_id[len("game_"):].isalnum())

    def test_custom_prefix_and_length(self):
        game_id = generate_unique_game_id(prefix="demo", length=8)
        self.assertRegex(game_id, r"^demo_[0-9A-Za-z]{8}$")

    def test_pending_collision_raises_after_max_attempts(self):
        engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
        Base.metadata.create_all(engine)
        Session = sessionmaker(bind=engine, future=True)
        try:
            with Session() as session:
                session.add(Game(game_id="game_xxxx"))
                # A single-character alphabet makes every candidate collide.
                with patch.object(model_utils, "BASE62_ALPHABET", "x"):
                    with self.assertRaises(RuntimeError):
                        generate_unique_game_id(session, length=4, max_attempts=3)
        finally:
            engine.dispose()

    def test_stored_collision_raises_after_max_attempts(self):
        engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
        Base.metadata.create_all(engine)
        Session = sessionmaker(bind=engine, future=True)
        try:
            with Session.begin() as session:
                session.add(Game(game_id="game_xxxx"))
            with Session() as session:
                self.assertEqual(len(session.new), 0)
                with patch.object(model_utils, "BASE62_ALPHABET", "x"):
                    with self.assertRaises(RuntimeError):
                        generate_unique_game_id(session, length=4, max_attempts=2)
                    self.assertEqual(
                        generate_unique_game_id(session, length=5), "game_xxxxx"
                    )
        finally:
            engine.dispose()


if __name__ == "__main__":
    unittest.main()
