import random
import pytest

from pokebattle.battle.core import BattleCore, Combatant
from pokebattle.battle.session import BattleSession, Phase, Side
from pokebattle.core.errors import ValidationError


class ScriptedRng:
    def __init__(self, *rolls):
        self.rolls = list(rolls)

    def randint(self, a, b):
        return self.rolls.pop(0)


def mon(name, type_, atk=10, dfn=0, spd=10, hp=50):
    return Combatant(name, type_, attack=atk, defense=dfn, speed=spd, health=hp)


def test_faster_first_combatant_opens():
    s = BattleSession(mon("a", "normal", spd=20), mon("b", "normal", spd=10))
    assert s.opening_side() is Side.FIRST


def test_speed_tie_goes_to_second():
    s = BattleSession(mon("a", "normal", spd=10), mon("b", "normal", spd=10))
    assert s.opening_side() is Side.SECOND


def test_rejects_fainted_starter():
    with pytest.raises(ValidationError):
        BattleSession(mon("a", "normal", hp=0), mon("b", "normal"))


def test_rejects_non_finite_starting_health():
    a = mon("a", "normal")
    a.health = float("nan")
    with pytest.raises(ValidationError):
        BattleSession(a, mon("b", "normal"))


def test_scripted_battle_turns_and_winner():
    first = mon("charmander", "fire", atk=50, dfn=0, spd=10, hp=10)
    second = mon("bulbasaur", "grass", atk=30, dfn=20, spd=5, hp=100)
    s = BattleSession(first, second, BattleCore(ScriptedRng(10, 5, 10, 5)))
    assert s.phase is Phase.NOT_STARTED
    ev1 = s.step()
    assert s.phase is Phase.TURN_IN_PROGRESS
    assert ev1.attacker_side is Side.FIRST
    assert ev1.lines() == [
        "------------ TURN 1 ------------",
        "*** charmander is attacking. ***",
        "IT'S SUPER EFFECTIVE!",
        "DAMAGE: 60",
        "charmander HP: 10",
        "bulbasaur HP: 40",
    ]
    ev2 = s.step()
    assert ev2.attacker_side is Side.SECOND
    assert "IT'S NOT VERY EFFECTIVE..." in ev2.lines()
    assert s.is_over()
    out = s.outcome()
    assert out.winner is Side.SECOND
    assert out.winner_name == "bulbasaur"
    assert out.loser_name == "charmander"
    assert out.turns == 2
    assert out.first_health == pytest.approx(-5)
    assert s.step() is None


def test_miss_narration_has_no_damage_line():
    s = BattleSession(mon("a", "normal", spd=20), mon("b", "normal"), BattleCore(ScriptedRng(1)))
    ev = s.step()
    assert ev.lines()[-1] == "THE ATTACK MISSED!"
    assert not any(line.startswith("DAMAGE") for line in ev.lines())


def test_outcome_before_finish_rejected():
    s = BattleSession(mon("a", "normal"), mon("b", "normal"))
    with pytest.raises(ValidationError):
        s.outcome()


@pytest.mark.parametrize("seed", [1, 7, 42, 1234])
def test_run_auto_reports_exactly_one_winner(seed):
    first = mon("pidgey", "flying", atk=12, dfn=4, spd=14, hp=40)
    second = mon("mankey", "fighting", atk=15, dfn=3, spd=14, hp=38)
    out = BattleSession(first, second, BattleCore(random.Random(seed))).run_auto()
    assert out.winner in (Side.FIRST, Side.SECOND)
    loser = first if out.winner is Side.SECOND else second
    winner = second if out.winner is Side.SECOND else first
    assert loser.health <= 0
    assert winner.health > 0
    assert out.turns == len(out.events)


def test_immune_pair_ends_in_stalemate():
    s = BattleSession(mon("rattata", "normal"), mon("gastly", "ghost"),
                      BattleCore(random.Random(3)), max_turns=10)
    out = s.run_auto()
    assert out.stalemate
    assert out.winner_name is None
    assert out.turns == 10
