import pytest

from regression_suite import SCENARIOS
from run_regression import main


@pytest.mark.parametrize("scenario", SCENARIOS, ids=lambda scenario: scenario.__name__)
def test_scenario(scenario):
    assert scenario()


def test_runner_filters_by_name(capsys):
    assert main(["poison_card"]) == 0
    out = capsys.readouterr().out
    assert "scenario_poison_card_is_idempotent" in out
    assert "1/1 scenarios passed." in out
    assert main(["no_such_scenario"]) == 2
