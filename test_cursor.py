# test_cursor.py – cursor context predicates

import unittest

from cursor import (
    get_nearest_beginning_quote,
    get_style_name_at_point,
    is_inside_string,
    is_style_name_value,
)


class IsStyleNameValueTest(unittest.TestCase):
    def test_accepts(self):
        self.assertTrue(is_style_name_value('<div styleName="'))
        self.assertTrue(is_style_name_value("data-styleName="))
        self.assertTrue(is_style_name_value("xstyleName="))

    def test_rejects(self):
        self.assertFalse(is_style_name_value("className="))
        self.assertFalse(is_style_name_value(""))
        self.assertFalse(is_style_name_value("styleName ="))
        self.assertFalse(is_style_name_value("styleName"))
        self.assertFalse(is_style_name_value("a="))

    def test_uses_last_equals(self):
        self.assertFalse(is_style_name_value('styleName="a" id='))


class IsInsideStringTest(unittest.TestCase):
    def test_open_string(self):
        self.assertTrue(is_inside_string('styleName="fo'))
        self.assertTrue(is_inside_string("styleName='a b "))
        self.assertTrue(is_inside_string("styleName={`x"))

    def test_closed_or_absent(self):
        self.assertFalse(is_inside_string('styleName="foo"'))
        self.assertFalse(is_inside_string("styleName="))
        self.assertFalse(is_inside_string('styleName"'))

    def test_explicit_quote(self):
        self.assertFalse(is_inside_string('styleName="fo', "'"))
        self.assertTrue(is_inside_string("styleName='fo", "'"))

    def test_nearest_quote(self):
        self.assertEqual(get_nearest_beginning_quote("=\"a'b"), "'")
        self.assertIsNone(get_nearest_beginning_quote("=ab"))


class StyleNameAtPointTest(unittest.TestCase):
    def test_inside_token(self):
        self.assertEqual(get_style_name_at_point('styleName="foo-bar"', 13), "foo-bar")

    def test_edges_are_inclusive(self):
        line = 'styleName="foo bar"'
        self.assertEqual(get_style_name_at_point(line, 11), "foo")
        self.assertEqual(get_style_name_at_point(line, 14), "foo")
        self.assertEqual(get_style_name_at_point(line, 15), "bar")

    def test_nothing_under_point(self):
        self.assertIsNone(get_style_name_at_point("  =  ", 1))
