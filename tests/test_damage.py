import random
import pytest

from pokebattle.battle.core import BattleCore, Combatant, base_damage
from pokebattle.core.errors import ValidationError


class ScriptedRng:
    """Returns queued d20 rolls in order."""
    def __init__(self, *rolls):
        self.rolls = list(rolls)

    def randint(self, a, b):
        value = self.rolls.pop(0)
        assert a <= value <= b
        return value


def fire(attack=50):
    return Combatant("charmander", "fire", attack=attack, defense=10, speed=30, health=100)


def grass(defense=20, hp=100):
    return Combatant("bulbasaur", "grass", attack=30, defense=defense, speed=20, health=hp)


def test_fire_on_grass_plain_hit():
    atk, dfn = fire(), grass()
    core = BattleCore(ScriptedRng(10, 5))  # no miss, no crit
    res = core.resolve_attack(atk, dfn)
    assert res.effectiveness == 2.0
    assert not res.missed and not res.critical
    assert res.damage == pytest.approx(60)
    assert dfn.health == pytest.approx(40)
    assert atk.health == 100


def test_critical_hit_doubles_damage_and_health_goes_negative():
    atk, dfn = fire(), grass()
    res = BattleCore(ScriptedRng(10, 20)).resolve_attack(atk, dfn)
    assert res.critical
    assert res.base_damage == pytest.approx(60)
    assert res.damage == pytest.approx(120)
    assert dfn.health == pytest.approx(-20)


def test_miss_leaves_health_and_skips_crit_roll():
    rng = ScriptedRng(1, 20)
    dfn = grass()
    res = BattleCore(rng).resolve_attack(fire(), dfn)
    assert res.missed and res.damage == 0
    assert dfn.health == 100
    assert rng.rolls == [20]


def test_minimum_damage_when_defense_dominates():
    atk = Combatant("rattata", "normal", attack=5, defense=5, speed=5, health=10)
    dfn = Combatant("onix", "rock", attack=5, defense=80, speed=5, health=10)
    res = BattleCore(ScriptedRng(2, 2)).resolve_attack(atk, dfn)
    assert res.damage == pytest.approx(0.5)  # max(1, 5-80) * 0.5


def test_immune_matchup_deals_nothing():
    atk = Combatant("rattata", "normal", attack=90, defense=5, speed=5, health=10)
    dfn = Combatant("gastly", "ghost", attack=5, defense=5, speed=5, health=10)
    res = BattleCore(ScriptedRng(2, 2)).resolve_attack(atk, dfn)
    assert res.damage == 0
    assert dfn.health == 10


def test_non_crit_damage_matches_formula():
    rng = random.Random(2024)
    core = BattleCore(rng)
    for _ in range(200):
        atk = Combatant("a", "water", attack=rng.uniform(0, 80), defense=1, speed=1, health=1)
        dfn = Combatant("d", "fire", attack=1, defense=rng.uniform(0, 80), speed=1, health=1000)
        before = dfn.health
        res = core.resolve_attack(atk, dfn)
        if res.missed:
            assert dfn.health == before
            continue
        expected = max(1, atk.attack - dfn.defense) * 2.0
        assert res.base_damage == pytest.approx(expected)
        assert res.damage == pytest.approx(expected * (2 if res.critical else 1))
        assert dfn.health == pytest.approx(before - res.damage)


def test_base_damage_helper():
    assert base_damage(fire(), grass(), 1.0) == 30


def test_negative_stats_rejected():
    with pytest.raises(ValidationError):
        Combatant("bad", "normal", attack=-1, defense=0, speed=0, health=10)


@pytest.mark.parametrize("stat", ["attack", "defense", "speed", "health"])
def test_non_finite_stats_rejected(stat):
    stats = dict(attack=10, defense=5, speed=5, health=20)
    stats[stat] = float("nan")
    with pytest.raises(ValidationError):
        Combatant("missingno", "normal", **stats)
    stats[stat] = float("inf")
    with pytest.raises(ValidationError):
        Combatant("missingno", "normal", **stats)
