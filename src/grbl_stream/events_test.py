import unittest

from .events import EventEmitter


class TestEventEmitter(unittest.TestCase):

    def test_emit_in_subscription_order(self):
        emitter = EventEmitter()
        calls = []
        emitter.on('message', lambda line: calls.append(('a', line)))
        emitter.on('message', lambda line: calls.append(('b', line)))
        emitter.emit('message', 'ok')
        self.assertEqual(calls, [('a', 'ok'), ('b', 'ok')])

    def test_off(self):
        emitter = EventEmitter()
        calls = []
        emitter.on('version', calls.append)
        emitter.off('version', calls.append)
        emitter.off('version', calls.append)
        emitter.emit('version', '1.1f')
        self.assertEqual(calls, [])

    def test_failing_listener_does_not_stop_others(self):
        emitter = EventEmitter()
        calls = []

        def broken(line):
            raise RuntimeError("listener bug")

        emitter.on('message', broken)
        emitter.on('message', calls.append)
        with self.assertLogs("EventEmitter", level="ERROR"):
            emitter.emit('message', 'ok')
        self.assertEqual(calls, ['ok'])

    def test_no_listeners(self):
        EventEmitter().emit('command', '$H')

if __name__ == '__main__':
    unittest.main()
