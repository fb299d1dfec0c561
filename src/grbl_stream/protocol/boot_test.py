import unittest

from ..errors import ErrorKind, ProtocolError
from .boot import EVENT_MESSAGE, EVENT_VERSION, BootEvent, BootState, advance


class TestBootStateMachine(unittest.TestCase):

    def test_banner_publishes_version(self):
        state, event = advance(BootState.AWAITING_VERSION, "Grbl 1.1f ['$' for help]")
        self.assertIs(state, BootState.AWAITING_UNLOCK_NOTICE)
        self.assertEqual(event, BootEvent(EVENT_VERSION, "1.1f"))

    def test_unlock_notice_is_a_message(self):
        state, event = advance(BootState.AWAITING_UNLOCK_NOTICE, "[MSG:'$H'|'$X' to unlock]")
        self.assertIs(state, BootState.STEADY)
        self.assertEqual(event, BootEvent(EVENT_MESSAGE, "[MSG:'$H'|'$X' to unlock]"))

    def test_unlock_notice_is_not_validated(self):
        state, event = advance(BootState.AWAITING_UNLOCK_NOTICE, "ALARM:3")
        self.assertIs(state, BootState.STEADY)
        self.assertEqual(event.kind, EVENT_MESSAGE)

    def test_steady_state_is_terminal(self):
        for line in ["ok", "Grbl 1.1f ['$' for help]", "<Idle>"]:
            state, event = advance(BootState.STEADY, line)
            self.assertIs(state, BootState.STEADY)
            self.assertEqual(event, BootEvent(EVENT_MESSAGE, line))

    def test_malformed_banner(self):
        for line in ["Grbl bogus", "Grbl 1.1 ['$' for help]", "Grbl 1.1f", " Grbl 1.1f ['$' for help]"]:
            with self.assertRaises(ProtocolError) as ctx:
                advance(BootState.AWAITING_VERSION, line)
            self.assertEqual(ctx.exception.input, line)
            self.assertIs(ctx.exception.kind, ErrorKind.PROTOCOL)

    def test_full_sequence(self):
        lines = ["Grbl 0.9j ['$' for help]", "[MSG:'$H'|'$X' to unlock]", "ok"]
        state = BootState.AWAITING_VERSION
        events = []
        for line in lines:
            state, event = advance(state, line)
            events.append(event)
        self.assertIs(state, BootState.STEADY)
        self.assertEqual([e.kind for e in events], [EVENT_VERSION, EVENT_MESSAGE, EVENT_MESSAGE])
        self.assertEqual(events[0].payload, "0.9j")

if __name__ == '__main__':
    unittest.main()
