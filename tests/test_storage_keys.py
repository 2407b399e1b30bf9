from __future__ import annotations

import fakeredis

from app.storage import RedisStorage, promo_key, session_cache_key


def test_session_cache_key_strips_leading_www_and_keeps_path() -> None:
    assert session_cache_key(host="www.farm.test", path="/play/") == "sb_wiz.xtc.t.farm.test-/play/"


def test_only_leading_www_is_stripped() -> None:
    assert session_cache_key(host="awww.farm.test", path="/") == "sb_wiz.xtc.t.awww.farm.test-/"
    assert promo_key(host="www.www.farm.test") == "sb_wiz.promo-key.v.www.farm.test"


def test_different_paths_get_different_session_keys() -> None:
    assert session_cache_key(host="farm.test", path="/a") != session_cache_key(host="farm.test", path="/b")


def test_promo_key_is_scoped_by_host_only() -> None:
    assert promo_key(host="www.farm.test") == "sb_wiz.promo-key.v.farm.test"


def test_redis_storage_get_missing_is_none() -> None:
    storage = RedisStorage(fakeredis.FakeRedis(decode_responses=True))

    assert storage.get("nope") is None

    storage.set("k", "v")
    assert storage.get("k") == "v"


def test_redis_storage_decodes_bytes_from_raw_client() -> None:
    storage = RedisStorage(fakeredis.FakeRedis())

    storage.set("k", "v")
    assert storage.get("k") == "v"

    storage.set("u", "Çà va")
    assert storage.get("u") == "Çà va"
