import cv2
import numpy as np

from footmeasure.config import MeasureConfig
from footmeasure.contour import detect_foot, edge_map, find_foot_candidates, select_largest_rect
from footmeasure.models import BoundingRect


def create_mask(rects):
    mask = np.zeros((200, 200), dtype=np.uint8)
    for (x1, y1), (x2, y2), value in rects:
        cv2.rectangle(mask, (x1, y1), (x2, y2), value, -1)
    return mask


def test_select_largest_rect_first_wins_ties():
    a = BoundingRect(0, 0, 10, 20)
    b = BoundingRect(5, 5, 20, 10)
    c = BoundingRect(1, 1, 5, 5)
    assert select_largest_rect([c, a, b]) is a
    assert select_largest_rect([c, b, a]) is b


def test_select_largest_rect_empty():
    assert select_largest_rect([]) is None


def test_detect_foot_selects_largest_region():
    mask = create_mask([
        ((20, 20), (59, 119), 120),  # 40x100
        ((120, 30), (149, 59), 120),  # 30x30
    ])
    candidates = find_foot_candidates(mask)
    foot = detect_foot(mask)

    assert foot is not None
    assert all(foot.area >= c.area for c in candidates)
    assert 40 <= foot.width <= 44
    assert 100 <= foot.height <= 104
    assert abs(foot.x - 20) <= 2
    assert abs(foot.y - 20) <= 2


def test_nested_contours_are_candidates():
    mask = create_mask([
        ((20, 20), (179, 179), 120),
        ((80, 80), (119, 119), 0),
    ])
    candidates = find_foot_candidates(mask)

    inner = [c for c in candidates if c.x >= 70 and c.width <= 50]
    assert inner, "hole boundary should be returned alongside the outer one"
    assert detect_foot(mask).width >= 160


def test_empty_mask_has_no_foot():
    mask = np.zeros((100, 100), dtype=np.uint8)
    assert find_foot_candidates(mask) == []
    assert detect_foot(mask) is None


def test_edge_thresholds_suppress_weak_edges():
    # A step of 20 levels never reaches the default high threshold
    mask = create_mask([((20, 20), (79, 79), 20)])
    assert not np.any(edge_map(mask))
    assert detect_foot(mask) is None

    relaxed = MeasureConfig(canny_low=10, canny_high=20)
    assert np.any(edge_map(mask, relaxed))
    assert detect_foot(mask, relaxed) is not None
