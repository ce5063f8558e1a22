import unittest

from tmxdecode import errors
from tmxdecode.wangid import WangId, decode_wang_id


class DecodeWangIdTest(unittest.TestCase):
    def test_decode(self):
        result = decode_wang_id("01020304")
        self.assertEqual([0, 1, 0, 2, 0, 3, 0, 4], list(result))

    def test_mixed_case_hex(self):
        self.assertEqual(WangId(10, 11, 12, 13, 14, 15, 15, 0), decode_wang_id("aBcDeFf0"))

    def test_slot_names(self):
        wang_id = decode_wang_id("12345678")
        self.assertEqual(1, wang_id.top)
        self.assertEqual(2, wang_id.top_right)
        self.assertEqual(3, wang_id.right)
        self.assertEqual(4, wang_id.bottom_right)
        self.assertEqual(5, wang_id.bottom)
        self.assertEqual(6, wang_id.bottom_left)
        self.assertEqual(7, wang_id.left)
        self.assertEqual(8, wang_id.top_left)
        self.assertEqual((1, 3, 5, 7), wang_id.edges())
        self.assertEqual((2, 4, 6, 8), wang_id.corners())

    def test_too_short(self):
        with self.assertRaises(errors.InvalidWangIdEncoding) as cm:
            decode_wang_id("0102")
        self.assertEqual("0102", cm.exception.read_string)
        self.assertEqual('"0102" is not a valid WangId format', str(cm.exception))

    def test_too_long(self):
        with self.assertRaises(errors.InvalidWangIdEncoding) as cm:
            decode_wang_id("010203040")
        self.assertEqual("010203040", cm.exception.read_string)

    def test_not_hex(self):
        for raw in ("0102030g", "0x010203", "0,1,0,2", "        ", "+1020304"):
            with self.assertRaises(errors.InvalidWangIdEncoding) as cm:
                decode_wang_id(raw)
            self.assertEqual(raw, cm.exception.read_string)

    def test_empty(self):
        with self.assertRaises(errors.InvalidWangIdEncoding):
            decode_wang_id("")


if __name__ == "__main__":
    unittest.main()
