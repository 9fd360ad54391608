import pytest

from src.platform.logging.loguru_io_config import access_log_level
from src.platform.logging.loguru_io_utils import (
    mask_sensitive,
    normalize_args_kwargs,
    should_mask_keyword,
    truncate_content,
)


@pytest.mark.unit
class TestMaskSensitive:
    def test_mask_keyword_argument(self) -> None:
        assert mask_sensitive("user='admin', password='s3cret'") == (
            "user='admin', password='********'"
        )

    def test_mask_dict_repr(self) -> None:
        masked = mask_sensitive({'POSTGRES_PASSWORD': 'postgres', 'POSTGRES_DB': 'parking'})
        assert masked == "{'POSTGRES_PASSWORD': '********', 'POSTGRES_DB': 'parking'}"

    def test_untouched_data_is_returned_as_is(self) -> None:
        data = {'vehicle_reg_number': 'ABCDEF'}
        assert mask_sensitive(data) is data

    def test_should_mask_keyword(self) -> None:
        assert should_mask_keyword('Password', 'x') == '********'
        assert should_mask_keyword('parking_type', 'CAR') == 'CAR'


@pytest.mark.unit
class TestTruncateContent:
    def test_short_content_unchanged(self) -> None:
        assert truncate_content('ABCDEF') == 'ABCDEF'

    def test_long_content_truncated(self) -> None:
        result = truncate_content('x' * 1010, max_length=1000)
        assert result.endswith('... (truncated 10 chars)')


@pytest.mark.unit
class TestNormalizeArgsKwargs:
    def test_drop_unknown_kwargs(self) -> None:
        def execute(self: object, *, vehicle_reg_number: str) -> None:
            pass

        args, kwargs = normalize_args_kwargs(
            execute, object(), vehicle_reg_number='ABCDEF', unused=1
        )

        assert kwargs == {'vehicle_reg_number': 'ABCDEF'}
        assert len(args) == 1


@pytest.mark.unit
class TestAccessLogLevel:
    @pytest.mark.parametrize(
        'message,level',
        [
            ('127.0.0.1 - "POST /api/parking/entry HTTP/1.1" - 201 - 8ms', 'INFO'),
            ('127.0.0.1 - "POST /api/parking/entry HTTP/1.1" - 409 - 3ms', 'WARNING'),
            ('127.0.0.1 - "POST /api/parking/exit HTTP/1.1" - 503 - 30ms', 'ERROR'),
            ('Started worker-1', None),
        ],
    )
    def test_level_follows_status_code(self, message: str, level: str | None) -> None:
        assert access_log_level(message) == level
