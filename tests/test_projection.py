import pytest

from pokebattle.battle.factory import project_stats, stat_report, round_stat, validate_level, trainer_combatant
from pokebattle.core.errors import RecordNotFound, ValidationError
from pokebattle.core.types import ElementalType
from pokebattle.data.loader import Pokedex, PokedexEntry


def entry(name, hp=45, atk=49, dfn=49, spa=65, spd=65, spe=45, type_=ElementalType.GRASS, evo=0):
    return PokedexEntry(name, hp, atk, dfn, spa, spd, spe, type_, evo)


@pytest.fixture
def dex():
    return Pokedex([
        entry("bulbasaur", evo=16),
        entry("ivysaur", 60, 62, 63, 80, 80, 60, evo=32),
        entry("venusaur", 80, 82, 83, 100, 100, 80),
        entry("eevee", 55, 55, 50, 45, 65, 55, ElementalType.NORMAL, evo=1),
        entry("vaporeon", 130, 65, 60, 110, 95, 65, ElementalType.WATER),
        entry("lonely", evo=10),
    ])


@pytest.mark.parametrize("level", [1, 5, 37, 100])
def test_hp_100_scales_to_level(level):
    c = project_stats(entry("x", hp=100), level)
    assert c.health == pytest.approx(level)


def test_projection_keeps_float_precision():
    c = project_stats(entry("bulbasaur"), 16)
    assert c.health == pytest.approx(7.2)
    assert c.attack == pytest.approx(((49 + 65) / 2) / 100 * 16)
    assert c.defense == pytest.approx(((49 + 65) / 2) / 100 * 16)
    assert c.speed == pytest.approx(7.2)
    assert c.type is ElementalType.GRASS


def test_report_rounds_when_no_evolution():
    proj = stat_report(Pokedex([entry("bulbasaur", evo=0)]), "bulbasaur", 16)
    assert proj.report.hp == 7
    assert proj.report.attack == 9   # 9.12
    assert proj.report.speed == 7
    assert proj.evolved_from is None
    assert proj.report.lines()[-1] == "CANNOT EVOLVE."


def test_evolution_reports_next_entry(dex):
    proj = stat_report(dex, "bulbasaur", 16)
    assert proj.evolved_from == "bulbasaur"
    assert proj.report.name == "ivysaur"
    assert proj.report.hp == round_stat(60 / 100 * 16)
    lines = proj.lines()
    assert lines[0] == "*** bulbasaur IS EVOLVING INTO ivysaur! ***"
    assert "EVOLVES AT: 32" in lines


def test_evolution_takes_only_one_step(dex):
    proj = stat_report(dex, "bulbasaur", 40)
    assert proj.report.name == "ivysaur"


def test_below_threshold_reports_same_species(dex):
    proj = stat_report(dex, "bulbasaur", 15)
    assert proj.report.name == "bulbasaur"
    assert proj.report.lines()[-1] == "EVOLVES AT: 16"


def test_branching_species_needs_a_choice(dex):
    proj = stat_report(dex, "eevee", 20)
    assert proj.needs_choice
    assert proj.report is None
    assert proj.lines() == ["*** EEVEE IS EVOLVING. PICK EVOLUTION. ***"]


def test_branching_species_with_choice(dex):
    proj = stat_report(dex, "eevee", 20, evolution="vaporeon")
    assert proj.report.name == "vaporeon"
    assert proj.report.hp == 26


def test_level_one_reports_base_factors(dex):
    proj = stat_report(dex, "eevee", 1)
    assert proj.report.base_only
    assert proj.report.hp == pytest.approx(0.55)
    assert proj.report.attack == pytest.approx(0.5)
    assert proj.lines()[0] == "HP: 0.55"


def test_broken_chain_is_reported(dex):
    with pytest.raises(ValidationError):
        stat_report(dex, "lonely", 12)


def test_unknown_species(dex):
    with pytest.raises(RecordNotFound):
        stat_report(dex, "mew", 5)


@pytest.mark.parametrize("bad", [0, -3, 2.5])
def test_level_bounds(bad):
    with pytest.raises(ValidationError):
        validate_level(bad)


def test_round_half_away_from_zero():
    assert round_stat(2.5) == 3
    assert round_stat(3.5) == 4
    assert round_stat(-2.5) == -3
    assert round_stat(7.2) == 7


def test_trainer_combatant(dex):
    c = trainer_combatant(dex, "Ivysaur", 10)
    assert c.name == "ivysaur"
    assert c.health == pytest.approx(6.0)


@pytest.mark.parametrize("level", [100, 101, 150])
def test_levels_have_no_upper_cap(level):
    assert validate_level(level) == level
    c = project_stats(entry("pikachu", hp=35), level)
    assert c.health == pytest.approx(0.35 * level)


def test_branching_choice_must_be_a_listed_form(dex):
    with pytest.raises(ValidationError):
        stat_report(dex, "eevee", 20, evolution="venusaur")


def test_evolution_choice_rejected_for_single_path_species(dex):
    with pytest.raises(ValidationError):
        stat_report(dex, "bulbasaur", 20, evolution="ivysaur")


def test_stat_report_lines_format(dex):
    proj = stat_report(dex, "bulbasaur", 15)
    assert proj.lines() == [
        "------ bulbasaur's STATS ------",
        "HP: 7",
        "Attack: 9",
        "Defense: 9",
        "Speed: 7",
        "Type: grass",
        "EVOLVES AT: 16",
    ]
