from decimal import Decimal

import pytest

from gaiamods.coins import Coin, CoinError, Coins, DecCoin
from gaiamods.globalfee.fee_utils import (
    combined_fee_requirement,
    contain_zero_coins,
    denoms_subset_of_including_zero,
    get_min_gas_price,
    get_tx_priority,
    is_any_gte_including_zero,
)


def C(*coins):
    return Coins(coins)


def S(*coins):
    return Coins(coins).sorted()


@pytest.mark.parametrize(
    "coins, expected",
    [
        (C(), True),
        (C(Coin("photon", 1), Coin("stake", 2)), False),
        (C(Coin("photon", 1), Coin("stake", 0)), True),
        (C(Coin("photon", 0), Coin("stake", 0), Coin("quark", 3)), True),
        (C(Coin("photon", 0), Coin("stake", 0)), True),
    ],
)
def test_contain_zero_coins(coins, expected):
    assert contain_zero_coins(coins) is expected


_c1 = Coin("photon", 1)
_c2 = Coin("stake", 2)
_c1h = Coin("photon", 10)
_c2h = Coin("stake", 20)
_z1 = Coin("photon", 0)
_z2 = Coin("stake", 0)
_z3 = Coin("quark", 0)
_n1 = Coin("Newphoton", 1)
_n2 = Coin("Newstake", 1)


@pytest.mark.parametrize(
    "global_fees, min_fees, expected",
    [
        pytest.param(C(), C(), C(), id="both empty"),
        pytest.param(C(), S(_c1, _c2), C(), id="global empty"),
        pytest.param(S(_c1, _c2), S(_c1, _c2), S(_c1, _c2), id="same"),
        pytest.param(S(_c1, _c2), S(_c1h, _c2h), S(_c1h, _c2h), id="min all higher"),
        pytest.param(S(_c1, _c2), S(_c1h, _c2), S(_c1h, _c2), id="min one higher"),
        pytest.param(S(_c1, _c2), S(_n1, _n2), S(_c1, _c2), id="no overlap"),
        pytest.param(S(_c1, _c2), S(_c1, _n1), S(_c1, _c2), id="partial overlap lower"),
        pytest.param(S(_c1, _c2), S(_c1h, _n1), C(_c1h, _c2), id="partial overlap higher"),
        pytest.param(S(_c1, _z2), S(_c1, _c2), C(_c1, _c2), id="global zero min nonzero"),
        pytest.param(S(_c1, _z2), S(_c1, _z2), S(_c1, _z2), id="both contain zero"),
        pytest.param(S(_c1, _z2), S(_c1, _z3), S(_c1, _z2), id="non-overlapping zero"),
        pytest.param(S(_z1, _z2), S(_z1, _z2), S(_z1, _z2), id="all zero"),
        pytest.param(S(_z1, _z2), S(_c1, _z3), C(_c1, _z2), id="all zero, min nonzero"),
        pytest.param(S(_z1, _z2), S(_c1, _z2), S(_c1, _z2), id="all zero, one nonzero"),
    ],
)
def test_combined_fee_requirement(global_fees, min_fees, expected):
    assert combined_fee_requirement(global_fees, min_fees) == expected


_q3 = Coin("quark", 3)
_nd1 = Coin("newphoton", 1)
_nd2 = Coin("newstake", 2)
_nd3 = Coin("newquark", 3)
_nd1z = Coin("newphoton", 0)
_all_zero = S(_z1, _z2, _z3)
_all_zero_short = S(_z1, _z2)
_contain_zero = S(_z1, _z2, _q3)
_contain_zero_new = S(_z1, _z2, _nd1z)
_coins = S(_c1, _c2, _q3)
_coins_short = S(_c1, _c2)
_all_new = S(_nd1, _nd2, _nd3)
_old_new = S(_c1, _c2, _nd1)


@pytest.mark.parametrize(
    "superset, subset, expected",
    [
        pytest.param(C(), C(), True, id="empty of empty"),
        pytest.param(C(), _coins, False, id="nonempty of empty"),
        pytest.param(_all_zero, C(), True, id="empty of all zero"),
        pytest.param(_contain_zero, C(), True, id="empty of contain zero"),
        pytest.param(_coins, _all_new, False, id="no overlap"),
        pytest.param(_coins, _old_new, False, id="partial overlap"),
        pytest.param(_coins, _coins_short, True, id="nonzero subset"),
        pytest.param(_all_zero, _coins_short, True, id="zero superset"),
        pytest.param(_contain_zero, _coins_short, True, id="contain zero superset"),
        pytest.param(_contain_zero, _contain_zero, True, id="both contain zero"),
        pytest.param(_contain_zero, _contain_zero_new, False, id="zero not overlapping"),
        pytest.param(_all_zero, _all_zero_short, True, id="all zero same denoms"),
    ],
)
def test_denoms_subset_of_including_zero(superset, subset, expected):
    assert denoms_subset_of_including_zero(subset, superset) is expected


def test_denoms_subset_rejects_invalid_denom():
    bad = C(Coin("1x", 1))
    with pytest.raises(CoinError):
        denoms_subset_of_including_zero(bad, bad)


_g1 = Coin("photon", 10)
_g1l = Coin("photon", 1)
_g1h = Coin("photon", 100)
_g2 = Coin("stake", 20)
_g2l = Coin("stake", 2)
_g2h = Coin("stake", 200)
_g3 = Coin("quark", 30)
_gn1 = Coin("newphoton", 10)
_gn2 = Coin("newstake", 20)
_gn3 = Coin("newquark", 30)
_g_all_zero = S(_z1, _z2, _z3)
_g_new_all = S(_gn1, _gn2, _gn3)
_g_all_zero_short = S(_z1, _z2)
_g_contain_zero = S(_z1, _z2, _g3)
_g_coins = S(_g1, _g2, _g3)
_g_high_high = C(_g1h, _g2h)
_g_high_low = S(_g1h, _g2l)
_g_low_low = S(_g1l, _g2l)
_g_old_new = S(_g1, _gn1, _gn2)
_g_old_low_new = S(_g1l, _gn1, _gn2)


@pytest.mark.parametrize(
    "c1, c2, expected",
    [
        pytest.param(_g_all_zero, _g_all_zero, True, id="zero vs zero"),
        pytest.param(_g_all_zero, _g_all_zero_short, True, id="zero short vs zero"),
        pytest.param(_g_all_zero_short, _g_all_zero, True, id="zero vs zero short"),
        pytest.param(_g_all_zero, _g_new_all, False, id="different denoms"),
        pytest.param(C(), C(), True, id="empty vs empty"),
        pytest.param(_g_all_zero, C(), True, id="empty vs zero"),
        pytest.param(_g_contain_zero, C(), True, id="empty vs contain zero"),
        pytest.param(C(), _g_all_zero, False, id="zero vs empty"),
        pytest.param(_g_coins, C(), False, id="empty vs nonzero"),
        pytest.param(C(), _g_coins, False, id="nonzero vs empty"),
        pytest.param(_g_all_zero, _g_coins, True, id="nonzero vs zero"),
        pytest.param(_g_contain_zero, _g_coins, True, id="nonzero vs contain zero"),
        pytest.param(_g_coins, _g_high_low, True, id="one higher one lower"),
        pytest.param(_g_coins, _g_low_low, False, id="all lower"),
        pytest.param(_g_coins, _g_high_high, True, id="all higher"),
        pytest.param(_g_coins, _g_new_all, False, id="no overlap"),
        pytest.param(_g_coins, _g_old_new, True, id="one overlapping gte"),
        pytest.param(_g_coins, _g_old_low_new, False, id="one overlapping smaller"),
    ],
)
def test_is_any_gte_including_zero(c1, c2, expected):
    assert is_any_gte_including_zero(c2, c1) is expected


def test_get_min_gas_price_multiplies_and_sorts():
    prices = [DecCoin("uatom", "0.002"), DecCoin("stake", "0.002")]
    assert get_min_gas_price(prices, 200_000) == C(Coin("stake", 400), Coin("uatom", 400))


def test_get_min_gas_price_rounds_up():
    assert get_min_gas_price([DecCoin("uatom", Decimal("0.0011"))], 1000) == C(Coin("uatom", 2))


@pytest.mark.parametrize(
    "prices", [[], [DecCoin("stake", 0), DecCoin("uatom", 0)]]
)
def test_get_min_gas_price_empty_when_zero(prices):
    assert get_min_gas_price(prices, 200_000) == C()


@pytest.mark.parametrize(
    "fee, expected",
    [
        (C(), 0),
        (C(Coin("a", 100), Coin("b", 50)), 50),
        (C(Coin("a", 2**70)), 2**63 - 1),
        (C(Coin("a", 2**70), Coin("b", 7)), 7),
    ],
)
def test_get_tx_priority(fee, expected):
    assert get_tx_priority(fee) == expected