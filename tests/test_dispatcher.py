import asyncio
import logging
import random

import pytest

from resume_tailor.services.dispatcher import (
    CredentialPool,
    GenerationDispatcher,
    OtherError,
    RateLimited,
    Success,
    Unavailable,
)
from resume_tailor.services.errors import (
    ConfigurationError,
    NonRetryableServiceError,
    PoolExhaustedError,
    mask_credential,
)

from tests.fakes import FixedOrder, ScriptedTransport


def run(coro):
    return asyncio.run(coro)


def test_pool_drops_empty_entries():
    pool = CredentialPool(["a-key", "", None, "b-key"])
    assert len(pool) == 2
    assert list(pool) == ["a-key", "b-key"]


def test_pool_drops_whitespace_only_entries():
    pool = CredentialPool(["a-key", " ", "\t", "\n"])
    assert list(pool) == ["a-key"]


def test_whitespace_only_keys_count_as_unconfigured():
    transport = ScriptedTransport(default=Success(text="never"))
    dispatcher = GenerationDispatcher(CredentialPool(["  ", "\t"]), transport)
    with pytest.raises(ConfigurationError):
        run(dispatcher.generate("hello"))
    assert transport.calls == []


def test_shuffled_is_a_permutation_and_leaves_pool_untouched():
    keys = [f"key-{i}" for i in range(10)]
    pool = CredentialPool(keys)
    order = pool.shuffled(random.Random(42))
    assert sorted(order) == sorted(keys)
    assert list(pool) == keys


def test_happy_path_single_credential():
    transport = ScriptedTransport(default=Success(text="generated"))
    dispatcher = GenerationDispatcher(CredentialPool(["only-key"]), transport)
    assert run(dispatcher.generate("hello")) == "generated"
    assert transport.credentials_tried == ["only-key"]


def test_fails_over_after_rate_limit(caplog):
    transport = ScriptedTransport({"first-key": RateLimited(), "second-key": Success(text="from second")})
    dispatcher = GenerationDispatcher(CredentialPool(["first-key", "second-key"]), transport, rng=FixedOrder())

    with caplog.at_level(logging.WARNING, logger="uvicorn.error"):
        assert run(dispatcher.generate("hello")) == "from second"

    assert transport.credentials_tried == ["first-key", "second-key"]
    assert mask_credential("first-key") in caplog.text
    assert "first-key" not in caplog.text


def test_result_is_the_first_success_whatever_the_order():
    transport = ScriptedTransport({"a": Unavailable(), "b": Success(text="B")})
    for seed in range(5):
        transport.calls.clear()
        dispatcher = GenerationDispatcher(CredentialPool(["a", "b"]), transport, rng=random.Random(seed))
        assert run(dispatcher.generate("hello")) == "B"
        assert transport.credentials_tried[-1] == "b"


def test_exhaustion_tries_each_credential_once():
    keys = ["k1", "k2", "k3", "k4"]
    transport = ScriptedTransport(default=Unavailable())
    dispatcher = GenerationDispatcher(CredentialPool(keys), transport, rng=random.Random(7))

    with pytest.raises(PoolExhaustedError) as excinfo:
        run(dispatcher.generate("hello"))

    assert excinfo.value.attempts == 4
    assert len(transport.calls) == 4
    assert sorted(transport.credentials_tried) == keys


def test_mixed_retryable_failures_exhaust_pool():
    transport = ScriptedTransport({"a": RateLimited(), "b": Unavailable()})
    dispatcher = GenerationDispatcher(CredentialPool(["a", "b"]), transport)
    with pytest.raises(PoolExhaustedError):
        run(dispatcher.generate("hello"))
    assert len(transport.calls) == 2


def test_non_retryable_error_short_circuits():
    transport = ScriptedTransport(default=OtherError(status=400, body="bad request"))
    dispatcher = GenerationDispatcher(CredentialPool(["k1", "k2", "k3"]), transport)

    with pytest.raises(NonRetryableServiceError) as excinfo:
        run(dispatcher.generate("hello"))

    assert excinfo.value.status == 400
    assert len(transport.calls) == 1


def test_server_error_other_than_503_is_not_retried():
    transport = ScriptedTransport(default=OtherError(status=500))
    dispatcher = GenerationDispatcher(CredentialPool(["k1", "k2"]), transport)
    with pytest.raises(NonRetryableServiceError):
        run(dispatcher.generate("hello"))
    assert len(transport.calls) == 1


def test_transport_exception_propagates_unchanged():
    error = NonRetryableServiceError(None, "connection refused")
    transport = ScriptedTransport(default=error)
    dispatcher = GenerationDispatcher(CredentialPool(["k1", "k2"]), transport)
    with pytest.raises(NonRetryableServiceError) as excinfo:
        run(dispatcher.generate("hello"))
    assert excinfo.value is error
    assert len(transport.calls) == 1


def test_empty_pool_fails_before_any_call():
    transport = ScriptedTransport()
    dispatcher = GenerationDispatcher(CredentialPool(["", None]), transport)
    with pytest.raises(ConfigurationError):
        run(dispatcher.generate("hello"))
    assert transport.calls == []


def test_blank_prompt_is_rejected():
    transport = ScriptedTransport()
    dispatcher = GenerationDispatcher(CredentialPool(["k1"]), transport)
    with pytest.raises(ValueError):
        run(dispatcher.generate("   "))
    assert transport.calls == []


def test_no_credential_used_twice_across_many_shuffles():
    keys = [f"key-{i}" for i in range(6)]
    for seed in range(25):
        transport = ScriptedTransport(default=RateLimited())
        dispatcher = GenerationDispatcher(CredentialPool(keys), transport, rng=random.Random(seed))
        with pytest.raises(PoolExhaustedError):
            run(dispatcher.generate("hello"))
        assert len(set(transport.credentials_tried)) == len(transport.credentials_tried) == 6


def test_mask_credential_hides_all_but_last_four():
    assert mask_credential("AIzaSyExample1234") == "...1234"
    assert mask_credential("abc") == "..."
