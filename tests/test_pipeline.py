import cv2
import numpy as np
import pytest

from footmeasure.config import MeasureConfig
from footmeasure.errors import FootNotFoundError, InvalidImageError, ReferenceNotFoundError
from footmeasure.pipeline import measure_foot, measure_views
from footmeasure.preprocess import preprocess

SKIN = (120, 160, 220)
TOKEN = (200, 200, 200)


def create_foot_image():
    """A 40x100 skin-tone foot and a radius-20 token on a black floor."""
    img = np.zeros((300, 300, 3), dtype=np.uint8)
    cv2.rectangle(img, (40, 60), (79, 159), SKIN, -1)
    cv2.circle(img, (220, 150), 20, TOKEN, -1)
    return img


def test_foot_and_token_scenario():
    result = measure_foot(create_foot_image())

    assert abs(result.reference.radius - 20) <= 2
    assert result.scale == pytest.approx(1.325 / result.reference.radius)
    assert result.scale == pytest.approx(0.06625, rel=0.1)

    assert 40 <= result.foot.width <= 46
    assert 100 <= result.foot.height <= 106
    assert result.width == pytest.approx(result.foot.width * result.scale)
    assert result.height == pytest.approx(result.foot.height * result.scale)
    assert result.width == pytest.approx(2.65, abs=0.4)
    assert result.height == pytest.approx(6.625, abs=0.8)
    assert result.reference in result.circles
    assert result.unit == "cm"


def test_pipeline_is_deterministic():
    img = create_foot_image()
    first = measure_foot(img)
    second = measure_foot(img)
    threaded = measure_foot(img, parallel=True)

    assert first == second
    assert first == threaded


def test_reference_radius_is_configurable():
    img = create_foot_image()
    base = measure_foot(img)
    doubled = measure_foot(img, MeasureConfig(reference_radius=2.65, unit="in"))

    assert doubled.scale == pytest.approx(2 * base.scale)
    assert doubled.width == pytest.approx(2 * base.width)
    assert doubled.height == pytest.approx(2 * base.height)
    assert doubled.unit == "in"


def test_black_image_reports_missing_reference():
    img = np.zeros((200, 200, 3), dtype=np.uint8)
    with pytest.raises(ReferenceNotFoundError):
        measure_foot(img)


def test_missing_foot_is_reported():
    img = np.zeros((300, 300, 3), dtype=np.uint8)
    cv2.circle(img, (150, 150), 20, TOKEN, -1)
    with pytest.raises(FootNotFoundError):
        measure_foot(img)


def test_missing_token_is_reported():
    img = np.zeros((300, 300, 3), dtype=np.uint8)
    cv2.rectangle(img, (40, 60), (79, 159), SKIN, -1)
    with pytest.raises(ReferenceNotFoundError):
        measure_foot(img)


def test_background_removed_copy_feeds_segmentation():
    img = create_foot_image()
    # Skin-coloured clutter that only the background-removed copy drops
    cv2.rectangle(img, (150, 230), (289, 289), SKIN, -1)
    no_bg = np.zeros_like(img)
    cv2.rectangle(no_bg, (40, 60), (79, 159), SKIN, -1)

    cluttered = measure_foot(img)
    cleaned = measure_foot(img, mask_source=no_bg)

    assert cluttered.foot.width > 100
    assert 40 <= cleaned.foot.width <= 46
    assert cleaned.reference == cluttered.reference


def test_invalid_image():
    with pytest.raises(InvalidImageError):
        measure_foot(np.zeros((10, 10), dtype=np.uint8))


def test_to_dict_report():
    result = measure_foot(create_foot_image())
    report = result.to_dict()

    assert report["reference_radius_px"] == result.reference.radius
    assert report["reference_radius"] == 1.325
    assert report["foot_width_px"] == result.foot.width
    assert report["foot_height_px"] == result.foot.height
    assert report["foot_height"] == pytest.approx(result.height)
    assert report["unit"] == "cm"


def test_float_valued_config_runs_through_opencv():
    config = MeasureConfig.from_dict({"blur_kernel": 3.0, "min_radius": 0.0, "max_radius": 30.0})
    result = measure_foot(create_foot_image(), config)

    assert result == measure_foot(create_foot_image())


def test_measure_views_matches_measure_foot():
    img = create_foot_image()
    views = preprocess(img)

    assert measure_views(views) == measure_foot(img)


def test_package_exports_resolve():
    import footmeasure

    for name in footmeasure.__all__:
        assert getattr(footmeasure, name) is not None
    assert footmeasure.measure_views is measure_views
