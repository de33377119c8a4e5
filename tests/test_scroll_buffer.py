"""
Tests for the fixed-capacity scroll buffer.
"""

import numpy as np
import pytest

from gravity_worm.worm_core.scroll_buffer import ScrollBuffer


class TestScrollBuffer:
    """Test ring-buffer scrolling in logical order."""

    def test_initial_fill(self):
        """New buffer is filled with the initial value."""
        buf = ScrollBuffer(5, 16, dtype=np.int64)
        assert len(buf) == 5
        assert buf.tolist() == [16] * 5
        assert buf.first == 16
        assert buf.last == 16

    def test_push_drops_oldest_appends_newest(self):
        """Push shifts the logical view left by one."""
        buf = ScrollBuffer(4, 0, dtype=np.int64)
        for value in (1, 2, 3):
            buf.push(value)
        assert buf.tolist() == [0, 1, 2, 3]

        buf.push(4)
        assert buf.tolist() == [1, 2, 3, 4]
        assert buf.first == 1
        assert buf.last == 4

    def test_order_survives_many_wraps(self):
        """Logical order stays oldest-to-newest after wrapping several times."""
        buf = ScrollBuffer(7, 0, dtype=np.int64)
        for value in range(1, 31):
            buf.push(value)
        assert buf.tolist() == list(range(24, 31))
        assert list(buf) == list(range(24, 31))
        assert len(buf) == 7

    def test_negative_and_out_of_range_index(self):
        """Negative indices count from the newest entry."""
        buf = ScrollBuffer(3, 0, dtype=np.int64)
        buf.push(5)
        buf.push(6)
        assert buf[-1] == 6
        assert buf[-3] == 0
        with pytest.raises(IndexError):
            buf[3]
        with pytest.raises(IndexError):
            buf[-4]

    def test_to_array_is_a_copy(self):
        """Mutating the exported array does not touch the buffer."""
        buf = ScrollBuffer(3, 1.5)
        arr = buf.to_array()
        arr[:] = 99.0
        assert buf.tolist() == [1.5, 1.5, 1.5]

    def test_vector_items(self):
        """Entries may be small vectors such as RGB colours."""
        buf = ScrollBuffer(3, (1, 2, 3), dtype=np.uint8, item_shape=(3,))
        buf.push((9, 8, 7))
        arr = buf.to_array()
        assert arr.shape == (3, 3)
        assert arr[-1].tolist() == [9, 8, 7]
        assert buf.last.tolist() == [9, 8, 7]

    def test_equality_uses_logical_order(self):
        """Buffers with different physical heads compare by content."""
        a = ScrollBuffer(3, 0, dtype=np.int64)
        b = ScrollBuffer(3, 0, dtype=np.int64)
        for value in (1, 2, 3):
            a.push(value)
        for value in (9, 1, 2, 3):
            b.push(value)
        assert a == b
        b.push(4)
        assert a != b

    def test_rejects_empty(self):
        """Zero length is invalid."""
        with pytest.raises(ValueError):
            ScrollBuffer(0, 0)
