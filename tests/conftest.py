import pytest

from badges_server.core.config import get_server_settings, load_settings


BASE_ENVIRON = {
    "NEXT_PUBLIC_IPFS_GATEWAY_TEMPLATE": "https://gw.example/ipfs/PATH",
    "NEXT_PUBLIC_SITE_URL": "https://badges.example",
    "NFT_STORAGE_API_KEY": "nft-storage-secret",
    "NEXT_PUBLIC_DISABLED_ACTIONS": "mint,burn",
    "NEXT_PUBLIC_WEB_SOCKET_PUSHER_APP_KEY": "pusher-key",
    "NEXT_PUBLIC_WEB_SOCKET_PUSHER_HOST": "ws.example",
    "NEXT_PUBLIC_WEB_PUSH_PUBLIC_KEY": "web-push-key",
}


@pytest.fixture
def environ() -> dict[str, str]:
    return dict(BASE_ENVIRON)


@pytest.fixture
def settings(environ):
    return load_settings(environ)


@pytest.fixture(autouse=True)
def _fresh_settings_snapshot():
    get_server_settings.cache_clear()
    yield
    get_server_settings.cache_clear()
