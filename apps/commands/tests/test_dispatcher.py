import pytest
from apps.commands.dispatcher import CommandDispatcher, UnknownIntentError
from apps.commands.handlers import dispatcher


class TestCommandDispatcher:
    """Tests for CommandDispatcher"""

    def test_dispatch_to_handler(self):
        commands = CommandDispatcher()

        @commands.register('echo')
        def echo(payload):
            return payload['value']

        assert commands.dispatch({'intent': 'echo', 'value': 42}) == 42

    def test_validator_output_reaches_handler(self):
        commands = CommandDispatcher()

        @commands.register('double', validate=lambda payload: int(payload['n']) * 2)
        def double(n):
            return n

        assert commands.dispatch({'intent': 'double', 'n': '21'}) == 42

    @pytest.mark.parametrize('payload', [{'intent': 'missing'}, {}])
    def test_unknown_intent(self, payload):
        with pytest.raises(UnknownIntentError) as exc:
            CommandDispatcher().dispatch(payload)

        assert str(exc.value) == 'Invalid intent'

    def test_duplicate_registration(self):
        commands = CommandDispatcher()
        commands.register('once')(lambda payload: None)

        with pytest.raises(ValueError):
            commands.register('once')(lambda payload: None)

    def test_registered_intents(self):
        assert dispatcher.intents == [
            'create-members',
            'create-week',
            'delete-member',
            'delete-week',
            'finalize-week',
            'update-member',
            'update-payment',
        ]
