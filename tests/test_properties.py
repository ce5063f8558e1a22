import math
import unittest

from tmxdecode import errors, properties
from tmxdecode.properties import (
    BoolValue,
    Color,
    ColorValue,
    FileValue,
    FloatValue,
    IntValue,
    ObjectValue,
    PropertyValue,
    StringValue,
    convert_to_bool,
    decode_property_value,
    parse_color,
)


class TestConvertToBool(unittest.TestCase):
    def test_string_true(self):
        self.assertTrue(convert_to_bool("true"))

    def test_string_false(self):
        self.assertFalse(convert_to_bool("false"))

    def test_case_sensitive(self):
        for value in ("True", "TRUE", "False", "FALSE"):
            with self.assertRaises(ValueError):
                convert_to_bool(value)

    def test_other_spellings_raise_error(self):
        for value in ("1", "0", "yes", "no", "t", "f", "", " true"):
            with self.assertRaises(ValueError):
                convert_to_bool(value)


class ParseColorTest(unittest.TestCase):
    def test_argb(self):
        self.assertEqual(Color(0x80, 0x11, 0x22, 0x33), parse_color("#80112233"))

    def test_rgb_is_opaque(self):
        self.assertEqual(Color(255, 0xAA, 0xBB, 0xCC), parse_color("#aabbcc"))

    def test_hash_optional(self):
        self.assertEqual(parse_color("#ff00ff00"), parse_color("ff00ff00"))
        self.assertEqual(Color(255, 1, 2, 3), parse_color("010203"))

    def test_named_fields(self):
        color = parse_color("#01020304")
        self.assertEqual(1, color.alpha)
        self.assertEqual(2, color.red)
        self.assertEqual(3, color.green)
        self.assertEqual(4, color.blue)

    def test_wrong_length(self):
        for value in ("", "#", "#fff", "#fffff", "#fffffff", "#fffffffff", "##ffffff"):
            with self.assertRaises(ValueError):
                parse_color(value)

    def test_not_hex(self):
        for value in ("#gg0000", "#12345z78", "#+1+2+3"):
            with self.assertRaises(ValueError):
                parse_color(value)


class DecodePropertyValueTest(unittest.TestCase):
    def test_default_type_is_string(self):
        self.assertEqual(StringValue("hello"), decode_property_value(None, "hello"))

    def test_string_is_verbatim(self):
        for raw in ("", "  padded  ", "1", "true", "multi\nline"):
            self.assertEqual(StringValue(raw), decode_property_value("string", raw))

    def test_int(self):
        self.assertEqual(IntValue(42), decode_property_value("int", "42"))
        self.assertEqual(IntValue(-7), decode_property_value("int", "-7"))
        self.assertEqual(IntValue(5), decode_property_value("int", "+5"))

    def test_int_limits(self):
        self.assertEqual(IntValue(2147483647), decode_property_value("int", "2147483647"))
        self.assertEqual(
            IntValue(-2147483648), decode_property_value("int", "-2147483648")
        )
        for raw in ("2147483648", "-2147483649"):
            with self.assertRaises(errors.InvalidPropertyValue):
                decode_property_value("int", raw)

    def test_int_malformed(self):
        for raw in ("", "1.5", "abc", " 1", "1_000", "0x10"):
            with self.assertRaises(errors.InvalidPropertyValue):
                decode_property_value("int", raw)

    def test_float(self):
        self.assertEqual(FloatValue(1.5), decode_property_value("float", "1.5"))
        self.assertEqual(FloatValue(-2.0), decode_property_value("float", "-2"))
        self.assertEqual(FloatValue(1e-3), decode_property_value("float", "1e-3"))
        self.assertEqual(FloatValue(0.5), decode_property_value("float", ".5"))
        self.assertEqual(FloatValue(3.0), decode_property_value("float", "3."))
        self.assertEqual(FloatValue(250.0), decode_property_value("float", "2.5E2"))

    def test_float_special_values(self):
        self.assertTrue(math.isinf(decode_property_value("float", "inf").value))
        self.assertTrue(math.isinf(decode_property_value("float", "-Infinity").value))
        self.assertTrue(math.isnan(decode_property_value("float", "NaN").value))

    def test_float_malformed(self):
        for raw in ("", "abc", "1.2.3", " 1.0", "1_0.5", "e5", "1e"):
            with self.assertRaises(errors.InvalidPropertyValue):
                decode_property_value("float", raw)

    def test_bool(self):
        self.assertEqual(BoolValue(True), decode_property_value("bool", "true"))
        self.assertEqual(BoolValue(False), decode_property_value("bool", "false"))

    def test_bool_is_case_sensitive(self):
        with self.assertRaises(errors.InvalidPropertyValue) as cm:
            decode_property_value("bool", "True")
        self.assertIn("True", cm.exception.description)

    def test_color(self):
        self.assertEqual(
            ColorValue(Color(255, 255, 0, 0)), decode_property_value("color", "#ff0000")
        )
        self.assertEqual(
            ColorValue(Color(0, 1, 2, 3)), decode_property_value("color", "00010203")
        )

    def test_color_malformed(self):
        with self.assertRaises(errors.InvalidPropertyValue):
            decode_property_value("color", "#ff00")

    def test_file(self):
        self.assertEqual(
            FileValue("../images/tiles.png"),
            decode_property_value("file", "../images/tiles.png"),
        )

    def test_file_does_not_touch_filesystem(self):
        value = decode_property_value("file", "does/not/exist.png")
        self.assertEqual("does/not/exist.png", value.value)

    def test_object(self):
        value = decode_property_value("object", "12")
        self.assertEqual(ObjectValue(12), value)
        self.assertFalse(value.is_empty)

    def test_object_none(self):
        self.assertTrue(decode_property_value("object", "0").is_empty)

    def test_object_malformed(self):
        for raw in ("", "-1", "4294967296", "one"):
            with self.assertRaises(errors.InvalidPropertyValue):
                decode_property_value("object", raw)

    def test_unknown_type(self):
        with self.assertRaises(errors.UnknownPropertyType) as cm:
            decode_property_value("vector3", "1,2,3")
        self.assertEqual("vector3", cm.exception.type_name)
        self.assertEqual("Unknown property value type 'vector3'", str(cm.exception))

    def test_unknown_type_is_not_invalid_value(self):
        with self.assertRaises(errors.TmxError) as cm:
            decode_property_value("class", "")
        self.assertNotIsInstance(cm.exception, errors.InvalidPropertyValue)

    def test_variant_follows_tag_not_syntax(self):
        self.assertIsInstance(decode_property_value("string", "12"), StringValue)
        self.assertIsInstance(decode_property_value("float", "12"), FloatValue)
        self.assertIsInstance(decode_property_value("object", "12"), ObjectValue)
        self.assertNotEqual(IntValue(12), ObjectValue(12))

    def test_type_names(self):
        for cls, name in [
            (StringValue, "string"),
            (IntValue, "int"),
            (FloatValue, "float"),
            (BoolValue, "bool"),
            (ColorValue, "color"),
            (FileValue, "file"),
            (ObjectValue, "object"),
        ]:
            self.assertEqual(name, cls.type)
            self.assertTrue(issubclass(cls, PropertyValue))


class RegisterPropertyTypeTest(unittest.TestCase):
    def setUp(self):
        self.saved = dict(properties.property_parsers)

    def tearDown(self):
        properties.property_parsers.clear()
        properties.property_parsers.update(self.saved)

    def test_register(self):
        def parse_enum(value):
            if value not in ("north", "south"):
                raise ValueError("bad direction {}".format(value))
            return StringValue(value)

        properties.register_property_type("direction", parse_enum)
        self.assertEqual(StringValue("north"), decode_property_value("direction", "north"))
        with self.assertRaises(errors.InvalidPropertyValue):
            decode_property_value("direction", "up")


if __name__ == "__main__":
    unittest.main()
