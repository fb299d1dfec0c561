import unittest

from .framer import LineFramer

STREAM = (
    b"Grbl 1.1f ['$' for help]\r\n"
    b"[MSG:'$H'|'$X' to unlock]\r\n"
    b"<Idle|MPos:0.000,1.500,-2.000|FS:0,0>\r\n"
    b"\r\n"
    b"ok\r\n"
)

EXPECTED = [
    "Grbl 1.1f ['$' for help]",
    "[MSG:'$H'|'$X' to unlock]",
    "<Idle|MPos:0.000,1.500,-2.000|FS:0,0>",
    "ok",
]


class TestLineFramer(unittest.TestCase):

    def test_whole_input(self):
        framer = LineFramer()
        self.assertEqual(framer.feed(STREAM), EXPECTED)
        self.assertEqual(framer.pending, 0)

    def test_chunk_size_independence(self):
        """Every chunk size yields the same lines as feeding the stream whole."""
        for size in range(1, len(STREAM) + 1):
            framer = LineFramer()
            lines = []
            for start in range(0, len(STREAM), size):
                lines.extend(framer.feed(STREAM[start:start + size]))
            self.assertEqual(lines, EXPECTED, f"Chunk size {size} produced different lines")

    def test_delimiter_split_across_chunks(self):
        framer = LineFramer()
        self.assertEqual(framer.feed(b"ok\r"), [])
        self.assertEqual(framer.feed(b"\nerror:9\r\n"), ["ok", "error:9"])

    def test_empty_lines_are_dropped(self):
        framer = LineFramer()
        self.assertEqual(framer.feed(b"\r\n\r\n\r\nok\r\n\r\n"), ["ok"])

    def test_partial_line_is_retained(self):
        framer = LineFramer()
        self.assertEqual(framer.feed(b"<Idle|MPos"), [])
        self.assertEqual(framer.pending, len(b"<Idle|MPos"))
        self.assertEqual(framer.feed(b":0,0,0>\r\n"), ["<Idle|MPos:0,0,0>"])
        self.assertEqual(framer.pending, 0)

    def test_bare_newline_is_not_a_delimiter(self):
        framer = LineFramer()
        self.assertEqual(framer.feed(b"ok\nok"), [])
        self.assertEqual(framer.feed(b"\r\n"), ["ok\nok"])

    def test_invalid_utf8_is_replaced(self):
        framer = LineFramer()
        self.assertEqual(framer.feed(b"\xffok\r\n"), ["\ufffdok"])

    def test_reset_discards_partial_line(self):
        framer = LineFramer()
        framer.feed(b"partial")
        framer.reset()
        self.assertEqual(framer.pending, 0)
        self.assertEqual(framer.feed(b"ok\r\n"), ["ok"])

if __name__ == '__main__':
    unittest.main()
