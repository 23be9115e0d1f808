from io import BytesIO
from unittest.mock import MagicMock

import pytest
import requests
from PIL import Image

from pokecollect.core.bounded_cache import BoundedCache
from pokecollect.services.image_service import ImageCacheService

IMAGE_URL = "https://images.example.com/sv6/001.png"


def png_bytes(size=(4, 4)) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", size, color=(255, 204, 0)).save(buffer, format="PNG")
    return buffer.getvalue()


def image_response(data: bytes, status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.ok = 200 <= status_code < 400
    response.status_code = status_code
    response.iter_content.return_value = [data]
    return response


@pytest.fixture
def image_session():
    session = MagicMock(spec=requests.Session)
    session.get.return_value = image_response(png_bytes())
    return session


@pytest.fixture
def service(image_session):
    return ImageCacheService(session=image_session, cache=BoundedCache(count_limit=10, cost_limit=1024 * 1024))


class TestImageCacheService:
    def test_loads_and_decodes(self, service, image_session):
        image = service.load_image(IMAGE_URL)

        assert image.size == (4, 4)
        image_session.get.assert_called_once()
        assert image_session.get.call_args.args == (IMAGE_URL,)
        assert image_session.get.call_args.kwargs["timeout"] == service.request_timeout

    def test_second_load_served_from_cache(self, service, image_session):
        first = service.load_image(IMAGE_URL)
        second = service.load_image(IMAGE_URL)

        assert second is first
        assert image_session.get.call_count == 1

    @pytest.mark.parametrize("url", [
        None, "", "not a url", "ftp://images.example.com/a.png", "http://[::1/card.png",
    ])
    def test_missing_or_unparsable_url(self, service, image_session, url):
        assert service.load_image(url) is None
        image_session.get.assert_not_called()

    def test_error_status(self, service, image_session):
        response = image_response(b"not found", status_code=404)
        image_session.get.return_value = response

        assert service.load_image(IMAGE_URL) is None
        assert IMAGE_URL not in service.cache
        response.close.assert_called_once()

    def test_undecodable_bytes(self, service, image_session):
        image_session.get.return_value = image_response(b"<html>not an image</html>")

        assert service.load_image(IMAGE_URL) is None
        assert len(service.cache) == 0

    def test_transport_failure(self, service, image_session):
        image_session.get.side_effect = requests.exceptions.ConnectionError("refused")

        assert service.load_image(IMAGE_URL) is None

    def test_entry_larger_than_cost_limit_not_cached(self, image_session):
        service = ImageCacheService(session=image_session, cache=BoundedCache(count_limit=10, cost_limit=10))

        assert service.load_image(IMAGE_URL) is not None
        assert service.load_image(IMAGE_URL) is not None
        assert image_session.get.call_count == 2

    def test_clear_cache(self, service, image_session):
        service.load_image(IMAGE_URL)
        service.clear_cache()
        service.load_image(IMAGE_URL)

        assert image_session.get.call_count == 2

    def test_injected_empty_cache_is_used(self, image_session):
        cache = BoundedCache(count_limit=1, cost_limit=1024)

        service = ImageCacheService(session=image_session, cache=cache)
        service.load_image(IMAGE_URL)

        assert service.cache is cache
        assert IMAGE_URL in cache

    def test_zero_timeouts_kept(self, image_session):
        service = ImageCacheService(session=image_session, request_timeout=0, resource_timeout=0)

        assert service.request_timeout == 0
        assert service.resource_timeout == 0

    def test_close_closes_session(self, service, image_session):
        service.close()

        image_session.close.assert_called_once()
