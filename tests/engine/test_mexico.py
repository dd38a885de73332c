"""
Tests for the Mexico turn and phase state machine.
"""

import pytest

from src.engine.base import (
    DicePair,
    DiePosition,
    GamePhase,
    NavigationTarget,
    Notifications,
    Score,
)
from src.engine.mexico import MexicoGame


def throw(game, dice, a, b):
    """Script both dice and throw."""
    dice.push(a, b)
    return game.roll_dice()


def throw_one(game, dice, face):
    """Script the single free die of a locked throw."""
    dice.push(face)
    return game.roll_dice()


class TestSetup:
    """Tests for player registration."""

    def test_add_player_trims_name(self, game):
        assert game.add_player("  Ann  ") is True
        assert [p.name for p in game.state.players] == ["Ann"]

    @pytest.mark.parametrize("name", ["", "   "])
    def test_blank_name_ignored(self, game, name):
        assert game.add_player(name) is False
        assert game.state.players == ()

    def test_roster_capped_at_ten(self, game):
        for i in range(10):
            assert game.add_player(f"P{i}")
        assert game.add_player("Eleven") is False
        assert len(game.state.players) == 10

    def test_remove_player(self, game):
        game.add_player("Ann")
        game.add_player("Bob")
        ann = game.state.players[0]
        assert game.remove_player(ann.id) is True
        assert [p.name for p in game.state.players] == ["Bob"]

    def test_remove_unknown_player_ignored(self, game):
        game.add_player("Ann")
        assert game.remove_player("nobody") is False
        assert len(game.state.players) == 1

    def test_start_needs_two_players(self, game):
        game.add_player("Ann")
        assert game.start_initial_roll() is False
        assert game.state.phase == GamePhase.SETUP
        assert game.navigation is None

    def test_start_initial_roll(self, game):
        game.add_player("Ann")
        game.add_player("Bob")
        assert game.start_initial_roll() is True
        assert game.state.phase == GamePhase.INITIAL_ROLL
        assert game.state.current_player_index == 0
        assert game.consume_navigation() == NavigationTarget.INITIAL_ROLL
        assert game.navigation is None

    def test_no_registration_after_setup(self, two_player_game):
        assert two_player_game.add_player("Late") is False
        bob = two_player_game.state.players[1]
        assert two_player_game.remove_player(bob.id) is False
        assert len(two_player_game.state.players) == 2


class TestInitialRoll:
    """Tests for deciding the turn order."""

    @pytest.fixture
    def rolling_game(self, game):
        for name in ("Ann", "Bob", "Cas"):
            game.add_player(name)
        game.start_initial_roll()
        return game

    def test_perform_initial_roll(self, rolling_game, dice):
        dice.push(4)
        assert rolling_game.perform_initial_roll() is True
        assert rolling_game.state.players[0].initial_roll == 4

    def test_cannot_roll_twice(self, rolling_game, dice):
        dice.push(4)
        rolling_game.perform_initial_roll()
        assert rolling_game.perform_initial_roll() is False
        assert dice.calls == 1

    def test_next_requires_roll(self, rolling_game):
        assert rolling_game.next_initial_roll() is False
        assert rolling_game.state.current_player_index == 0

    def test_next_moves_to_next_player(self, rolling_game, dice):
        dice.push(4)
        rolling_game.perform_initial_roll()
        assert rolling_game.next_initial_roll() is True
        assert rolling_game.state.current_player.name == "Bob"

    def test_order_descending_with_stable_ties(self, rolling_game, dice):
        for face in (2, 5, 5):
            dice.push(face)
            rolling_game.perform_initial_roll()
            rolling_game.next_initial_roll()

        state = rolling_game.state
        assert [p.name for p in state.players] == ["Bob", "Cas", "Ann"]
        assert state.phase == GamePhase.ROLLING
        assert state.current_player_index == 0
        assert state.max_throws == 3
        assert rolling_game.consume_navigation() == NavigationTarget.GAME

    def test_players_reset_after_ordering(self, rolling_game, dice):
        for face in (3, 1, 6):
            dice.push(face)
            rolling_game.perform_initial_roll()
            rolling_game.next_initial_roll()

        for player in rolling_game.state.players:
            assert player.score is None
            assert player.throws_used == 0
            assert player.current_dice is None
            assert player.initial_roll is not None

    def test_roll_dice_rejected_during_initial_roll(self, rolling_game, dice):
        assert rolling_game.roll_dice() is False
        assert dice.calls == 0


class TestRollDice:
    """Tests for throwing during a round."""

    def test_roll_records_throw(self, two_player_game, dice):
        assert throw(two_player_game, dice, 6, 4) is True
        ann = two_player_game.state.current_player
        assert ann.current_dice == DicePair(6, 4)
        assert ann.previous_dice == DicePair(6, 4)
        assert ann.throws_used == 1
        assert ann.has_rolled is True
        assert two_player_game.notifications == Notifications()

    def test_roll_rejected_in_setup(self, game):
        assert game.roll_dice() is False

    def test_no_fourth_throw(self, two_player_game, dice):
        for a, b in [(6, 4), (5, 4), (6, 5)]:
            assert throw(two_player_game, dice, a, b)
        assert two_player_game.roll_dice() is False
        assert two_player_game.state.current_player.throws_used == 3
        assert dice.calls == 6

    def test_snapshot_replaced_not_mutated(self, two_player_game, dice):
        before = two_player_game.state
        throw(two_player_game, dice, 6, 4)
        assert two_player_game.state is not before
        assert before.current_player.current_dice is None

    def test_is_rolling_only_during_throw(self, dice):
        seen = []
        game = MexicoGame(die_source=lambda: seen.append(game.is_rolling) or 5)
        game.add_player("Ann")
        game.add_player("Bob")
        game.start_initial_roll()
        game.perform_initial_roll()
        assert seen == [True]
        assert game.is_rolling is False

    def test_invalid_die_source_raises(self):
        game = MexicoGame(die_source=lambda: 7)
        game.add_player("Ann")
        game.add_player("Bob")
        game.start_initial_roll()
        with pytest.raises(ValueError, match="between 1 and 6"):
            game.perform_initial_roll()


class TestLocking:
    """Tests for locking a 1 or a 2."""

    def test_locked_die_kept_in_first_slot(self, two_player_game, dice):
        throw(two_player_game, dice, 1, 5)
        assert two_player_game.lock_die(1, DiePosition.FIRST) is True

        throw_one(two_player_game, dice, 6)
        assert two_player_game.state.current_player.current_dice == DicePair(1, 6)
        throw_one(two_player_game, dice, 4)
        assert two_player_game.state.current_player.current_dice == DicePair(1, 4)

    def test_locked_die_kept_in_second_slot(self, two_player_game, dice):
        throw(two_player_game, dice, 5, 2)
        assert two_player_game.lock_die(2, 2) is True
        throw_one(two_player_game, dice, 6)
        ann = two_player_game.state.current_player
        assert ann.current_dice == DicePair(6, 2)
        assert ann.locked_position == DiePosition.SECOND

    @pytest.mark.parametrize("a,b,face", [(4, 5, 4), (6, 3, 6)])
    def test_only_one_or_two_lockable(self, two_player_game, dice, a, b, face):
        throw(two_player_game, dice, a, b)
        assert two_player_game.lock_die(face, DiePosition.FIRST) is False
        assert not two_player_game.state.current_player.has_lock

    def test_second_lock_rejected(self, two_player_game, dice):
        throw(two_player_game, dice, 1, 1)
        assert two_player_game.lock_die(1, DiePosition.FIRST) is True
        assert two_player_game.lock_die(1, DiePosition.SECOND) is False
        assert two_player_game.state.current_player.locked_position == DiePosition.FIRST

    def test_face_must_match_slot(self, two_player_game, dice):
        throw(two_player_game, dice, 1, 5)
        assert two_player_game.lock_die(1, DiePosition.SECOND) is False
        assert two_player_game.lock_die(2, DiePosition.FIRST) is False

    def test_lock_before_throw_rejected(self, two_player_game):
        assert two_player_game.lock_die(1, DiePosition.FIRST) is False

    def test_lock_rejected_on_pointing_throw(self, two_player_game, dice):
        throw(two_player_game, dice, 1, 3)
        two_player_game.dismiss_pointing_popup()
        # Same faces again: a Duim, so no popup, but still the Pointing pair
        throw(two_player_game, dice, 3, 1)
        assert two_player_game.notifications.duim is True
        assert two_player_game.lock_die(1, DiePosition.SECOND) is False

    def test_invalid_position_rejected(self, two_player_game, dice):
        throw(two_player_game, dice, 1, 5)
        assert two_player_game.lock_die(1, 3) is False

    def test_unlock(self, two_player_game, dice):
        throw(two_player_game, dice, 1, 5)
        two_player_game.lock_die(1, DiePosition.FIRST)
        assert two_player_game.unlock_die() is True
        assert not two_player_game.state.current_player.has_lock

        throw(two_player_game, dice, 6, 4)
        assert two_player_game.state.current_player.current_dice == DicePair(6, 4)


class TestPointing:
    """Tests for the void 1-3 throw."""

    def test_pointing_opens_popup(self, two_player_game, dice):
        throw(two_player_game, dice, 3, 1)
        assert two_player_game.notifications.pointing is True
        assert two_player_game.state.current_player.throws_used == 1

    def test_play_blocked_until_dismissed(self, two_player_game, dice):
        throw(two_player_game, dice, 1, 3)
        assert two_player_game.roll_dice() is False
        assert two_player_game.confirm_score() is False
        assert two_player_game.next_player() is False
        assert dice.calls == 2

    def test_dismiss_gives_throw_back(self, two_player_game, dice):
        throw(two_player_game, dice, 6, 4)
        throw(two_player_game, dice, 1, 3)
        assert two_player_game.dismiss_pointing_popup() is True

        ann = two_player_game.state.current_player
        assert ann.throws_used == 1
        assert ann.current_dice is None
        assert two_player_game.notifications.pointing is False
        assert throw(two_player_game, dice, 5, 4) is True

    def test_dismiss_clears_lock(self, two_player_game, dice):
        throw(two_player_game, dice, 1, 5)
        two_player_game.lock_die(1, DiePosition.FIRST)
        throw_one(two_player_game, dice, 3)
        two_player_game.dismiss_pointing_popup()

        ann = two_player_game.state.current_player
        assert not ann.has_lock
        assert ann.throws_used == 1

    def test_cannot_confirm_voided_throw(self, two_player_game, dice):
        throw(two_player_game, dice, 1, 3)
        two_player_game.dismiss_pointing_popup()
        assert two_player_game.confirm_score() is False

    def test_dismiss_without_popup_ignored(self, two_player_game):
        assert two_player_game.dismiss_pointing_popup() is False


class TestMexico:
    """Tests for the 1-2 throw."""

    def test_mexico_opens_popup(self, two_player_game, dice):
        throw(two_player_game, dice, 2, 1)
        assert two_player_game.notifications.mexico is True
        assert two_player_game.confirm_score() is False

    def test_dismiss_confirms_and_fills_pot(self, two_player_game, dice):
        throw(two_player_game, dice, 6, 5)
        throw(two_player_game, dice, 1, 2)
        assert two_player_game.dismiss_mexico_popup() is True

        state = two_player_game.state
        assert state.players[0].score == Score.mexico()
        assert state.pot == 5
        assert state.mexico_mode is True
        assert state.max_throws == 2
        assert state.current_player.name == "Bob"

    def test_mexico_burns_other_hundreds(self, three_player_game, dice):
        game = three_player_game
        throw(game, dice, 4, 4)
        game.confirm_score()
        assert game.state.pot == 4

        throw(game, dice, 1, 2)
        game.dismiss_mexico_popup()

        ann, bob, _ = game.state.players
        assert ann.score is None
        assert bob.score == Score.mexico()
        assert game.state.pot == 9

    def test_mexico_keeps_normal_scores(self, three_player_game, dice):
        game = three_player_game
        throw(game, dice, 6, 4)
        game.confirm_score()
        throw(game, dice, 2, 1)
        game.dismiss_mexico_popup()
        assert game.state.players[0].score == Score.normal(64)

    def test_mexico_by_later_player_keeps_cap(self, two_player_game, dice):
        throw(two_player_game, dice, 6, 4)
        throw(two_player_game, dice, 5, 4)
        two_player_game.confirm_score()
        throw(two_player_game, dice, 1, 2)
        two_player_game.dismiss_mexico_popup()
        assert two_player_game.state.max_throws == 2


class TestSand:
    """Tests for the 2-3 throw."""

    def test_sand_confirmed_without_pot(self, two_player_game, dice):
        throw(two_player_game, dice, 3, 2)
        assert two_player_game.notifications.sand is True
        assert two_player_game.dismiss_sand_popup() is True

        state = two_player_game.state
        assert state.players[0].score == Score.sand()
        assert state.pot == 0
        assert state.max_throws == 1
        assert state.current_player_index == 1


class TestDuim:
    """Tests for repeat-throw detection."""

    def test_repeat_in_either_order(self, two_player_game, dice):
        throw(two_player_game, dice, 6, 4)
        throw(two_player_game, dice, 4, 6)
        assert two_player_game.notifications.duim is True
        assert two_player_game.state.current_player.throws_used == 2

    def test_first_throw_never_duim(self, two_player_game, dice):
        throw(two_player_game, dice, 5, 5)
        assert two_player_game.notifications.duim is False

    def test_duim_does_not_block(self, two_player_game, dice):
        throw(two_player_game, dice, 6, 4)
        throw(two_player_game, dice, 6, 4)
        assert two_player_game.confirm_score() is True
        assert two_player_game.state.players[0].score == Score.normal(64)

    def test_duim_suppresses_special_popup(self, two_player_game, dice):
        throw(two_player_game, dice, 1, 3)
        two_player_game.dismiss_pointing_popup()
        throw(two_player_game, dice, 3, 1)
        assert two_player_game.notifications.duim is True
        assert two_player_game.notifications.pointing is False

    def test_dismiss_duim(self, two_player_game, dice):
        throw(two_player_game, dice, 6, 4)
        throw(two_player_game, dice, 4, 6)
        assert two_player_game.dismiss_duim_popup() is True
        assert two_player_game.notifications.duim is False
        assert two_player_game.dismiss_duim_popup() is False

    def test_cleared_by_next_non_repeat_throw(self, two_player_game, dice):
        throw(two_player_game, dice, 6, 4)
        throw(two_player_game, dice, 4, 6)
        throw(two_player_game, dice, 5, 1)
        assert two_player_game.notifications.duim is False

    def test_cleared_when_turn_passes(self, two_player_game, dice):
        throw(two_player_game, dice, 6, 4)
        throw(two_player_game, dice, 6, 4)
        two_player_game.confirm_score()
        assert two_player_game.state.current_player.name == "Bob"
        assert two_player_game.notifications == Notifications()

    def test_cleared_when_player_skipped(self, two_player_game, dice):
        throw(two_player_game, dice, 5, 3)
        throw(two_player_game, dice, 3, 5)
        two_player_game.next_player()
        assert two_player_game.notifications.duim is False


class TestConfirmScore:
    """Tests for standing on a throw."""

    def test_confirm_before_throw_rejected(self, two_player_game):
        assert two_player_game.confirm_score() is False
        assert two_player_game.state.current_player_index == 0

    def test_confirm_advances(self, two_player_game, dice):
        throw(two_player_game, dice, 6, 4)
        assert two_player_game.confirm_score() is True
        assert two_player_game.state.players[0].score == Score.normal(64)
        assert two_player_game.state.current_player.name == "Bob"

    def test_hundred_adds_drinks_to_pot(self, two_player_game, dice):
        throw(two_player_game, dice, 5, 5)
        two_player_game.confirm_score()
        assert two_player_game.state.pot == 5

    def test_normal_adds_nothing(self, two_player_game, dice):
        throw(two_player_game, dice, 6, 4)
        two_player_game.confirm_score()
        assert two_player_game.state.pot == 0

    def test_leader_caps_throws(self, two_player_game, dice):
        throw(two_player_game, dice, 6, 4)
        throw(two_player_game, dice, 5, 4)
        two_player_game.confirm_score()
        assert two_player_game.state.max_throws == 2

        throw(two_player_game, dice, 6, 1)
        throw(two_player_game, dice, 5, 1)
        assert two_player_game.roll_dice() is False
        assert two_player_game.state.current_player.throws_used == 2

    def test_later_player_does_not_change_cap(self, three_player_game, dice):
        game = three_player_game
        throw(game, dice, 6, 4)
        throw(game, dice, 5, 4)
        game.confirm_score()
        throw(game, dice, 6, 1)
        game.confirm_score()
        assert game.state.max_throws == 2


class TestRoundEnd:
    """Tests for ending a round with a single loser."""

    def test_single_loser(self, two_player_game, dice):
        throw(two_player_game, dice, 6, 4)
        two_player_game.confirm_score()
        throw(two_player_game, dice, 5, 4)
        two_player_game.confirm_score()

        state = two_player_game.state
        assert state.phase == GamePhase.ROUND_END
        assert state.loser.name == "Bob"
        assert state.death_match_players == ()
        assert two_player_game.consume_navigation() == NavigationTarget.RESULT

    def test_pointing_excluded_from_losers(self, two_player_game, dice):
        throw(two_player_game, dice, 1, 3)
        two_player_game.dismiss_pointing_popup()
        throw(two_player_game, dice, 3, 1)
        two_player_game.confirm_score()
        assert two_player_game.state.players[0].score == Score.pointing()

        throw(two_player_game, dice, 6, 4)
        two_player_game.confirm_score()
        assert two_player_game.state.loser.name == "Bob"

    def test_skipped_players_excluded(self, three_player_game, dice):
        game = three_player_game
        throw(game, dice, 6, 4)
        game.confirm_score()
        assert game.next_player() is True
        throw(game, dice, 6, 5)
        game.confirm_score()
        assert game.state.loser.name == "Ann"

    def test_round_without_scores(self, two_player_game):
        two_player_game.next_player()
        two_player_game.next_player()
        state = two_player_game.state
        assert state.phase == GamePhase.ROUND_END
        assert state.loser is None

    def test_intents_ignored_after_round(self, two_player_game, dice):
        two_player_game.next_player()
        two_player_game.next_player()
        assert two_player_game.roll_dice() is False
        assert two_player_game.confirm_score() is False
        assert two_player_game.next_player() is False
        assert two_player_game.unlock_die() is False


class TestStartNewRound:
    """Tests for starting the next round."""

    def test_resets_round(self, two_player_game, dice):
        throw(two_player_game, dice, 5, 5)
        two_player_game.confirm_score()
        throw(two_player_game, dice, 2, 1)
        two_player_game.dismiss_mexico_popup()
        assert two_player_game.state.phase == GamePhase.ROUND_END
        two_player_game.consume_navigation()

        assert two_player_game.start_new_round() is True
        state = two_player_game.state
        assert state.phase == GamePhase.ROLLING
        assert state.pot == 0
        assert state.max_throws == 3
        assert state.mexico_mode is False
        assert state.round_number == 2
        assert state.loser is None
        assert state.death_match_players == ()
        assert all(p.score is None and p.throws_used == 0 for p in state.players)
        assert two_player_game.consume_navigation() == NavigationTarget.GAME

    def test_keeps_turn_order(self, three_player_game):
        for _ in range(3):
            three_player_game.next_player()
        three_player_game.start_new_round()
        assert [p.name for p in three_player_game.state.players] == ["Ann", "Bob", "Cas"]

    def test_rejected_mid_round(self, two_player_game):
        assert two_player_game.start_new_round() is False
        assert two_player_game.state.round_number == 1


class TestStaleIntents:
    """Every intent is a no-op when it does not apply."""

    @pytest.mark.parametrize("intent,args", [
        ("perform_initial_roll", ()),
        ("next_initial_roll", ()),
        ("roll_dice", ()),
        ("lock_die", (1, 1)),
        ("unlock_die", ()),
        ("confirm_score", ()),
        ("next_player", ()),
        ("dismiss_pointing_popup", ()),
        ("dismiss_mexico_popup", ()),
        ("dismiss_sand_popup", ()),
        ("dismiss_duim_popup", ()),
        ("roll_death_match_dice", ()),
        ("next_death_match_player", ()),
        ("start_new_round", ()),
    ])
    def test_ignored_during_setup(self, game, intent, args):
        before = game.state
        assert getattr(game, intent)(*args) is False
        assert game.state is before
