"""Tests for converting subgraph pair records into pools."""

from quoter.amm.uniswap_v2 import parse_pair_to_pool
from tests.helpers import TOKEN_A, TOKEN_B, make_pair_data


class TestParsePairToPool:
    """Tests for parse_pair_to_pool."""

    def test_scales_reserves_by_token_decimals(self):
        pair = make_pair_data(TOKEN_A, TOKEN_B, "1.5", "2000", decimals0=6, decimals1=18)
        pool = parse_pair_to_pool(pair)

        assert pool is not None
        assert pool.reserve_a == 1_500_000
        assert pool.reserve_b == 2000 * 10**18
        assert pool.token_a.decimals == 6
        assert pool.token_b.decimals == 18

    def test_truncates_extra_precision(self):
        """The indexer may report more digits than the token supports."""
        pair = make_pair_data(TOKEN_A, TOKEN_B, "1.123456789", "1", decimals0=6, decimals1=0)
        pool = parse_pair_to_pool(pair)

        assert pool is not None
        assert pool.reserve_a == 1_123_456
        assert pool.reserve_b == 1

    def test_normalizes_addresses(self):
        upper_a = "0x" + TOKEN_A[2:].upper()
        pair = make_pair_data(upper_a, TOKEN_B, pair_id="0x" + "AB" * 20)
        pool = parse_pair_to_pool(pair)

        assert pool is not None
        assert pool.token_a.address == TOKEN_A
        assert pool.address == "0x" + "ab" * 20

    def test_malformed_reserve_returns_none(self):
        pair = make_pair_data(TOKEN_A, TOKEN_B, "not-a-number", "1")
        assert parse_pair_to_pool(pair) is None

    def test_out_of_range_reserve_returns_none(self):
        pair = make_pair_data(TOKEN_A, TOKEN_B, "1", "1e999999")
        assert parse_pair_to_pool(pair) is None

    def test_negative_reserve_returns_none(self):
        pair = make_pair_data(TOKEN_A, TOKEN_B, "-5", "1")
        assert parse_pair_to_pool(pair) is None

    def test_non_hex_token_id_returns_none(self):
        pair = make_pair_data("weth", TOKEN_B)
        assert parse_pair_to_pool(pair) is None

    def test_identical_tokens_returns_none(self):
        pair = make_pair_data(TOKEN_A, TOKEN_A)
        assert parse_pair_to_pool(pair) is None
