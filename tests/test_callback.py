# Tests for spotify_oauth/callback.py and spotify_oauth/dispatch.py

import httpx
import pytest

from spotify_oauth import (
    CallbackReceiver,
    HandlerAlreadyRegisteredError,
    ProfileFetcher,
    TokenState,
    URLEventDispatcher,
    extract_access_token,
)

CALLBACK = "my-awesome-app://spotifyOauthCallback"


# ---------------------------------------------------------------------------
# extract_access_token
# ---------------------------------------------------------------------------


class TestExtractAccessToken:
    def test_token_in_fragment(self):
        url = f"{CALLBACK}#access_token=XYZ&token_type=Bearer&expires_in=3600"
        assert extract_access_token(url) == "XYZ"

    def test_token_not_first_param(self):
        url = f"{CALLBACK}#token_type=Bearer&access_token=abc123"
        assert extract_access_token(url) == "abc123"

    def test_percent_encoded_value(self):
        assert extract_access_token(f"{CALLBACK}#access_token=a%2Bb") == "a+b"

    def test_no_fragment(self):
        assert extract_access_token(CALLBACK) is None

    def test_empty_fragment(self):
        assert extract_access_token(f"{CALLBACK}#") is None

    def test_fragment_without_token(self):
        assert extract_access_token(f"{CALLBACK}#error=access_denied&state=x") is None

    def test_token_in_query_is_ignored(self):
        assert extract_access_token(f"{CALLBACK}?access_token=XYZ") is None

    def test_empty_token_value(self):
        assert extract_access_token(f"{CALLBACK}#access_token=") is None

    def test_first_token_wins(self):
        assert extract_access_token(f"{CALLBACK}#access_token=one&access_token=two") == "one"

    def test_garbage_string(self):
        assert extract_access_token("not a url at all") is None

    def test_plus_is_kept_literally(self):
        assert extract_access_token(f"{CALLBACK}#access_token=ab+cd") == "ab+cd"

    def test_unbalanced_bracket_in_host(self):
        assert extract_access_token("my-awesome-app://[spotifyOauthCallback#access_token=x") is None


# ---------------------------------------------------------------------------
# CallbackReceiver
# ---------------------------------------------------------------------------


@pytest.fixture
def requests_seen():
    return []


@pytest.fixture
def receiver(requests_seen):
    def handler(request):
        requests_seen.append(request)
        return httpx.Response(200, json={"display_name": "Ada"})

    state = TokenState()
    fetcher = ProfileFetcher(state, transport=httpx.MockTransport(handler))
    profiles = []
    receiver = CallbackReceiver(state, fetcher, profiles.append)
    receiver.profiles = profiles
    return receiver


class TestCallbackReceiver:
    async def test_stores_token_and_fetches(self, receiver, requests_seen):
        result = await receiver.handle_url(f"{CALLBACK}#access_token=XYZ")

        assert receiver.state.access_token == "XYZ"
        assert result.ok
        assert receiver.last_result is result
        assert receiver.profiles == [{"display_name": "Ada"}]
        assert requests_seen[0].headers["Authorization"] == "Bearer XYZ"

    async def test_no_fragment_is_noop(self, receiver, requests_seen):
        receiver.state.access_token = "previous"

        result = await receiver.handle_url(CALLBACK)

        assert result is None
        assert receiver.state.access_token == "previous"
        assert requests_seen == []
        assert receiver.profiles == []

    async def test_fragment_without_token_is_noop(self, receiver, requests_seen):
        result = await receiver.handle_url(f"{CALLBACK}#error=access_denied")

        assert result is None
        assert receiver.state.access_token is None
        assert requests_seen == []

    async def test_no_log_for_tokenless_callback(self, receiver, caplog):
        with caplog.at_level("DEBUG"):
            await receiver.handle_url(f"{CALLBACK}#state=abc")
        assert caplog.records == []

    async def test_malformed_url_is_ignored(self, receiver, requests_seen):
        result = await receiver.handle_url("my-awesome-app://[spotifyOauthCallback#access_token=x")

        assert result is None
        assert receiver.state.access_token is None
        assert requests_seen == []

    async def test_plus_in_token_is_sent_unchanged(self, receiver, requests_seen):
        await receiver.handle_url(f"{CALLBACK}#access_token=ab+cd")

        assert receiver.state.access_token == "ab+cd"
        assert requests_seen[0].headers["Authorization"] == "Bearer ab+cd"

    async def test_non_ascii_token_fails_without_request(self, receiver, requests_seen):
        result = await receiver.handle_url(f"{CALLBACK}#access_token=%C3%A9")

        assert receiver.state.access_token == "\u00e9"
        assert not result.ok
        assert requests_seen == []
        assert receiver.profiles == []

    async def test_latest_token_replaces_previous(self, receiver):
        await receiver.handle_url(f"{CALLBACK}#access_token=first")
        await receiver.handle_url(f"{CALLBACK}#access_token=second")
        assert receiver.state.access_token == "second"

    async def test_register_once(self, receiver):
        dispatcher = URLEventDispatcher("my-awesome-app")
        receiver.register(dispatcher)

        assert dispatcher.has_handler
        with pytest.raises(HandlerAlreadyRegisteredError):
            receiver.register(dispatcher)


# ---------------------------------------------------------------------------
# URLEventDispatcher
# ---------------------------------------------------------------------------


class TestURLEventDispatcher:
    async def test_dispatch_delivers_to_handler(self):
        delivered = []

        async def handler(url):
            delivered.append(url)

        dispatcher = URLEventDispatcher("my-awesome-app")
        dispatcher.set_event_handler(handler)

        assert await dispatcher.dispatch(f"{CALLBACK}#access_token=XYZ") is True
        assert delivered == [f"{CALLBACK}#access_token=XYZ"]

    async def test_scheme_is_case_insensitive(self):
        dispatcher = URLEventDispatcher("My-Awesome-App")
        assert dispatcher.accepts("MY-AWESOME-APP://spotifyOauthCallback")

    async def test_other_scheme_is_ignored(self):
        delivered = []

        async def handler(url):
            delivered.append(url)

        dispatcher = URLEventDispatcher("my-awesome-app")
        dispatcher.set_event_handler(handler)

        assert await dispatcher.dispatch("https://example.com/#access_token=XYZ") is False
        assert delivered == []

    async def test_malformed_url_is_not_accepted(self):
        delivered = []

        async def handler(url):
            delivered.append(url)

        dispatcher = URLEventDispatcher("my-awesome-app")
        dispatcher.set_event_handler(handler)

        assert dispatcher.accepts("my-awesome-app://[spotifyOauthCallback#access_token=x") is False
        assert await dispatcher.dispatch("my-awesome-app://[spotifyOauthCallback#access_token=x") is False
        assert await dispatcher.dispatch_argv(["my-awesome-app://[spotifyOauthCallback"]) == 0
        assert delivered == []

    async def test_dispatch_without_handler(self):
        dispatcher = URLEventDispatcher("my-awesome-app")
        assert await dispatcher.dispatch(CALLBACK) is False

    async def test_dispatch_argv_filters_arguments(self):
        delivered = []

        async def handler(url):
            delivered.append(url)

        dispatcher = URLEventDispatcher("my-awesome-app")
        dispatcher.set_event_handler(handler)

        count = await dispatcher.dispatch_argv(["--debug", f"{CALLBACK}#access_token=a", "other"])

        assert count == 1
        assert delivered == [f"{CALLBACK}#access_token=a"]

    async def test_end_to_end_through_dispatcher(self, receiver):
        dispatcher = URLEventDispatcher("my-awesome-app")
        receiver.register(dispatcher)

        await dispatcher.dispatch(f"{CALLBACK}#access_token=XYZ&token_type=Bearer")

        assert receiver.state.access_token == "XYZ"
        assert receiver.profiles == [{"display_name": "Ada"}]
