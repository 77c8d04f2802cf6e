from types import SimpleNamespace

import pytest

from evalwatch.logger.properties import (
    CURRENT_Y,
    EVALUATIONS,
    RAW_Y_BEST,
    TRANSFORMED_Y,
    TRANSFORMED_Y_BEST,
    BoundProperty,
)
from evalwatch.core.info import Info


INFO = Info(
    evaluation_count=7,
    raw_y=12.5,
    transformed_y=2.5,
    raw_y_best=11.0,
    transformed_y_best=1.0,
    has_improved=False,
)


def test_builtin_projections():
    assert EVALUATIONS(INFO) == 7
    assert CURRENT_Y(INFO) == 12.5
    assert RAW_Y_BEST(INFO) == 11.0
    assert TRANSFORMED_Y(INFO) == 2.5
    assert TRANSFORMED_Y_BEST(INFO) == 1.0


def test_call_to_string():
    assert EVALUATIONS.call_to_string(INFO) == "7"
    assert TRANSFORMED_Y.call_to_string(INFO) == "2.5"


def test_bound_property_from_attribute():
    algo = SimpleNamespace(sigma=0.3)
    p = BoundProperty.from_attribute(algo, "sigma")
    assert p.name == "sigma"
    assert p(INFO) == 0.3
    algo.sigma = 0.1
    assert p(INFO) == 0.1


def test_bound_property_soft_miss():
    algo = SimpleNamespace()
    p = BoundProperty.from_attribute(algo, "sigma")
    assert p(INFO) is None
    assert p.call_to_string(INFO, no_value="NA") == "NA"
    algo.sigma = None
    assert p(INFO) is None
    algo.sigma = "not a number"
    assert p(INFO) is None
    algo.sigma = 2
    assert p(INFO) == 2.0


def test_bound_property_with_callback():
    state = {"v": 1.5}
    p = BoundProperty(name="v", getter=lambda: state.get("v"))
    assert p(INFO) == 1.5
    del state["v"]
    assert p(INFO) is None


def test_bound_property_requires_getter():
    with pytest.raises(ValueError):
        BoundProperty(name="x")


def test_current_y_vector_is_soft_miss():
    info = Info(1, [1.0, 2.0], 0.5, 1.0, 0.5)
    assert CURRENT_Y(info) is None
