# gaiamods

Pure-Python logic for two chain modules:

- **globalfee**: a chain-wide minimum gas price. It is combined with a
  node's own minimum gas prices and checked against the fee a transaction
  pays.
- **icamauth**: messages, a keeper, a message server and channel callbacks
  for registering and driving interchain accounts from a controller chain.

The package has no third-party dependencies.

## Installation

```
pip install .
pip install .[test]   # adds pytest
```

## Coins (`gaiamods.coins`)

- `Coin(denom, amount)` holds an integer amount. `DecCoin(denom, amount)`
  holds a `Decimal` amount, such as a gas price. Both provide `is_zero()` and
  `is_negative()`.
- `Coins` is an immutable tuple of coins. It provides `sorted()`,
  `find(denom)` (the coin, or `None`), `amount_of(denom)` (zero if the denom
  is absent) and `is_zero()`.
- `new_coins(*coins)` builds a valid set. It drops zero coins, sorts by
  denomination, and raises `CoinError` for a bad denomination, a negative
  amount or a duplicate denomination.
- `validate_denom(denom)` raises `CoinError` unless the denomination starts
  with a letter and is 3 to 128 characters from `[a-zA-Z0-9/:._-]`.

```python
from gaiamods.coins import Coin, new_coins

fees = new_coins(Coin("uatom", 400), Coin("photon", 0))  # Coins([Coin("uatom", 400)])
fees.amount_of("uatom")  # 400
```

## Global fee

### Parameters (`gaiamods.globalfee.params`)

`Params` holds `minimum_gas_prices`, a `Coins` of `DecCoin`.
`Params.validate_basic()` and `validate_dec_coins()` raise `ParamError` if the
prices are unsorted, contain a duplicate or negative amount, or have a bad
denomination. Zero prices are allowed.

`ParamStore` is an in-memory parameter space. It provides `has`, `get`, `set`,
`set_param_set(params)` and `get_param_set()`. If it is given a key table
(such as `KEY_TABLE`), it only accepts registered keys.

### Genesis (`gaiamods.globalfee.genesis`)

`decode_genesis` and `encode_genesis` convert between JSON documents and
`GenesisState`. `validate_genesis` checks a state, and
`genesis_from_app_state` picks this module's entry out of a whole application
state. `AppModule` uses these helpers with a `ParamStore`:

```python
from gaiamods.globalfee.genesis import AppModule
from gaiamods.globalfee.params import ParamStore

module = AppModule(ParamStore())
doc = '{"params":{"minimum_gas_prices":[{"denom":"ALX","amount":"1"}]}}'
module.validate_genesis(doc)   # raises ParamError if invalid
module.init_genesis(doc)
module.export_genesis()
# b'{"params":{"minimum_gas_prices":[{"denom":"ALX","amount":"1.000000000000000000"}]}}'
module.default_genesis()       # b'{"params":{"minimum_gas_prices":[]}}'
```

### Queries (`gaiamods.globalfee.querier`)

`GrpcQuerier(param_source).minimum_gas_prices()` returns a
`QueryMinimumGasPricesResponse`. If no prices are stored, the response holds
an empty `Coins`.

### Fee helpers (`gaiamods.globalfee.fee_utils`)

- `get_min_gas_price(min_gas_prices, gas)` returns `ceil(price * gas)` for each
  denomination, sorted. It returns an empty set if every price is zero.
- `combined_fee_requirement(global_fees, min_gas_prices)` returns, for each
  global denomination, the larger of the global fee and the local fee.
- `denoms_subset_of_including_zero(coins, coins_b)` and
  `is_any_gte_including_zero(coins, coins_b)` compare a paid fee with a
  requirement. Zero-amount coins count here, so an empty fee passes a
  requirement that contains a zero coin.
- `contain_zero_coins(coins)` returns true for an empty set or a set that
  holds a zero coin.
- `get_tx_priority(fee)` returns the smallest amount in the fee. Amounts
  outside the int64 range count as the int64 maximum.

```python
from gaiamods.coins import Coin, Coins
from gaiamods.globalfee.fee_utils import (
    combined_fee_requirement,
    denoms_subset_of_including_zero,
    is_any_gte_including_zero,
)

required = combined_fee_requirement(
    Coins([Coin("photon", 1), Coin("stake", 2)]),
    Coins([Coin("photon", 10)]),
)  # photon 10, stake 2
paid = Coins([Coin("photon", 10)])
denoms_subset_of_including_zero(paid, required)  # True
is_any_gte_including_zero(paid, required)        # True
```

### The ante check (`gaiamods.globalfee.fee`)

`FeeDecorator(bypass_msg_types, global_fee_source, staking_source)` checks a
`FeeTx` (fee, gas, msgs) in a `Context` (min_gas_prices, is_check_tx). Both
sources must have a key table. If no global prices are stored, the required
global fee is zero in the staking bond denomination (`KEY_BOND_DENOM`).

The fee is only checked when `is_check_tx` is true and `simulate` is false.
The decorator raises `InsufficientFeeError` in these cases:

- The fee uses a denomination that is not required.
- No paid coin reaches its required amount.

A transaction made only of bypass message types may pay nothing, as long as
its gas is at most 200 000 per message. If it does pay, it must pay in a
global fee denomination. Messages are type-URL strings, or objects with a
`type_url` attribute. When the check passes, the decorator calls
`next_handler(ctx, tx, simulate)` and returns its result.

```python
from gaiamods.coins import Coin, DecCoin
from gaiamods.globalfee.fee import (
    KEY_BOND_DENOM, STAKING_KEY_TABLE, Context, FeeDecorator, FeeTx,
)
from gaiamods.globalfee.params import KEY_TABLE, Params, ParamStore

global_store = ParamStore(KEY_TABLE)
global_store.set_param_set(Params([DecCoin("uatom", "0.001")]))
staking_store = ParamStore(STAKING_KEY_TABLE)
staking_store.set(KEY_BOND_DENOM, "uatom")

decorator = FeeDecorator(["/ibc.core.channel.v1.MsgRecvPacket"], global_store, staking_store)
ctx = Context(min_gas_prices=[DecCoin("uatom", "0.002")], is_check_tx=True)
tx = FeeTx(fee=[Coin("uatom", 400)], gas=200_000, msgs=["/cosmos.bank.v1beta1.MsgSend"])
decorator.ante_handle(ctx, tx, False, lambda ctx, tx, simulate: "accepted")  # "accepted"
```

## Interchain accounts

### Messages (`gaiamods.icamauth.msgs`)

- `MsgRegisterAccount(owner, connection_id, version)` and
  `MsgSubmitTx(owner, connection_id, msg)` provide `validate_basic()` and
  `get_signers()`. Both check that the owner is a `cosmos` bech32 address and
  raise `InvalidAddressError` if it is not.
- `new_msg_submit_tx(msg, connection_id, owner)` requires `msg` to carry a
  string `type_url`.
- `acc_address_from_bech32(address, prefix="cosmos")` decodes an address to
  its raw bytes.
- `QueryInterchainAccountRequest` and `QueryInterchainAccountResponse` are the
  query types.

### Keeper and message server (`gaiamods.icamauth.keeper`)

`Keeper(ica_controller_keeper, scoped_keeper, serializer=None)` works through
a controller keeper and a scoped capability keeper, which the caller
supplies.

- `Keeper.interchain_account(request)` returns the account address. It
  raises `NotFoundError` if there is none.
- `MsgServer(keeper).register_account(msg)` registers an account.
- `MsgServer.submit_tx(msg, block_time)` looks up the active channel and its
  capability, serialises the message and sends it with a timeout one minute
  after `block_time`. It raises `ActiveChannelNotFoundError` or
  `CapabilityNotFoundError` when the channel or capability is missing.

The default serializer writes the messages as JSON. `new_controller_port_id`
and `channel_capability_path` build the identifiers involved.

### Channel callbacks (`gaiamods.icamauth.ibc_module`)

`IBCModule(keeper)`:

- `on_chan_open_init` claims the channel capability and returns the proposed
  version.
- `on_recv_packet` always returns an `ErrorAcknowledgement`.
- The other callbacks accept their input and record it in `history`.

`IcaAppModule` is the module's application face. It keeps no genesis state,
so its genesis document is empty.

## What the package does not do

It has no command-line interface and no gRPC or REST server. Parameters are
kept in memory only. It does not implement IBC transport or an
interchain-accounts controller: those keepers must be provided by the caller.

## Tests

```
pytest
```