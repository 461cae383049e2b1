import numpy as np
import pandas as pd
import pytest

from scalestep.errors import MissingColumnError, NotFittedError
from scalestep.recipe import Recipe
from scalestep.selectors import all_numeric, all_outcomes
from scalestep.steps import MinMaxScaleStep

def _train():
    return pd.DataFrame({"x": [0.0, 5.0, 10.0], "y": [1, 3, 2], "label": [0, 1, 0]})

def test_prep_and_juice_skips_outcomes():
    rec = Recipe(_train(), outcomes=["label"]).step_scale_min_max(all_numeric(), -all_outcomes())
    out = rec.prep().juice()
    np.testing.assert_allclose(out["x"], [0.0, 0.5, 1.0])
    np.testing.assert_allclose(out["y"], [0.0, 1.0, 0.5])
    assert list(out["label"]) == [0, 1, 0]

def test_prep_leaves_original_recipe_untrained():
    rec = Recipe(_train()).step_scale_min_max("x")
    prepped = rec.prep()
    assert rec.trained is False and rec.steps[0].trained is False
    assert prepped.trained is True and prepped.steps[0].columns == ("x",)

def test_bake_uses_range_of_new_data():
    prepped = Recipe(_train()).step_scale_min_max("x").prep()
    out = prepped.bake(pd.DataFrame({"x": [2.0, 4.0], "y": [9, 9], "label": [1, 1]}))
    np.testing.assert_allclose(out["x"], [0.0, 1.0])

def test_skip_step_only_left_out_of_bake():
    prepped = Recipe(_train()).step_scale_min_max("x", skip=True).prep()
    np.testing.assert_allclose(prepped.juice()["x"], [0.0, 0.5, 1.0])
    new = pd.DataFrame({"x": [2.0, 4.0]})
    pd.testing.assert_frame_equal(prepped.bake(new), new)

def test_later_steps_see_earlier_output():
    prepped = (Recipe(_train(), outcomes=["label"])
               .step_scale_min_max("x")
               .step_scale_min_max(all_numeric(), -all_outcomes())
               .prep())
    assert prepped.steps[1].columns == ("x", "y")

def test_bake_before_prep():
    with pytest.raises(NotFittedError):
        Recipe(_train()).step_scale_min_max("x").bake(_train())

def test_juice_requires_retain():
    prepped = Recipe(_train()).step_scale_min_max("x").prep(retain=False)
    with pytest.raises(ValueError):
        prepped.juice()

def test_bake_missing_column():
    prepped = Recipe(_train()).step_scale_min_max(all_numeric()).prep()
    with pytest.raises(MissingColumnError):
        prepped.bake(_train().drop(columns="y"))

def test_add_step_after_prep():
    prepped = Recipe(_train()).step_scale_min_max("x").prep()
    with pytest.raises(ValueError):
        prepped.add_step(MinMaxScaleStep(terms=("y",)))

def test_prep_on_other_training_data():
    rec = Recipe(_train()).step_scale_min_max(all_numeric())
    prepped = rec.prep(training=_train().drop(columns="label"))
    assert prepped.steps[0].columns == ("x", "y")

def test_tidy():
    rec = Recipe(_train()).step_scale_min_max("x", id="scale_min_max_fixed")
    t = rec.tidy()
    assert t.to_dict("records") == [{"number": 1, "operation": "step", "type": "scale_min_max",
                                     "trained": False, "skip": False, "id": "scale_min_max_fixed"}]
    assert list(rec.prep().tidy(1)["terms"]) == ["x"]
    with pytest.raises(IndexError):
        rec.tidy(2)

def test_print():
    rec = Recipe(_train(), outcomes=["label"]).step_scale_min_max(all_numeric(), -all_outcomes())
    assert "Scaling for all_numeric(), -all_outcomes()" in str(rec)
    text = str(rec.prep())
    assert "Scaling for x, y [trained]" in text
    assert "Training data contained 3 data points" in text
