# clearinghouse

An in-memory model of a perpetual-futures clearing house. It holds the exchange
state and lists markets priced by an AMM. It scales oracle prices, checks margin
ratios, opens user accounts and keeps fixed-size record histories. It is pure
Python and needs no dependencies at run time.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `clearinghouse.exchange`: `ClearingHouse` keeps the exchange's accounts in memory
  and accepts these instructions: `initialize`, `initialize_history`,
  `initialize_order_state`, `initialize_market`, `initialize_user`,
  `initialize_user_with_explicit_payer` and `deposit_collateral`. A `Clock` supplies
  the timestamp and the slot.
- `clearinghouse.admin`: `initialize_state`, `initialize_history` and
  `initialize_order_state`. These build and link the exchange state. Each vault
  authority must be the program-derived address of its vault.
- `clearinghouse.listing`: `initialize_market` fills a market slot. The base and
  quote reserves must be equal, and the initial price comes from the peg
  multiplier.
- `clearinghouse.users`: `initialize_user` applies the whitelist-token check.
  `deposit_collateral` checks that the deposit names the exchange's own accounts.
- `clearinghouse.amm`: `calculate_price` turns reserves and a peg multiplier into a
  mark price at `MARK_PRICE_PRECISION`.
- `clearinghouse.margin_validation`: `validate_margin_ratios` checks that each
  ratio is within bounds and that initial >= partial >= maintenance.
- `clearinghouse.market`: `Markets` is a table of 64 slots. It also defines
  `Market`, `Amm`, `OracleSource` and `OraclePriceData`.
  `Amm.get_pyth_price` and `Amm.get_pyth_ema_price` read a price account and scale
  it to mark precision.
- `clearinghouse.oracle`: `PriceUpdate` and `initialize_price` give a mock price
  account that serialises to the layout the market code reads.
- `clearinghouse.history`: ring buffers of 1024 records. There is one for each of
  curve, deposit, funding payment, funding rate, liquidation, trade and order
  records. Each provides `append` and `next_record_id`. `OrderHistory` also hands
  out order ids through `next_order_id`.
- `clearinghouse.state`, `clearinghouse.user`, `clearinghouse.order_state` and
  `clearinghouse.orders`: the data classes for exchange settings, users and
  positions, order configuration and orders.
- `clearinghouse.tokens`: token accounts with their 165-byte layout,
  `get_whitelist_token` and a `MockUsdcFaucet`.
- `clearinghouse.pubkey`: `Pubkey` (base58), `create_program_address` and
  `find_program_address`.
- `clearinghouse.bignum` and `clearinghouse.cast`: checked fixed-width integers
  (`U192`, `U256`) and range-checked conversions.

Failures of the exchange rules are raised as `ClearingHouseError`. Its `code`
attribute is an `ErrorCode`.

## Example

```python
from clearinghouse.exchange import ClearingHouse, Clock
from clearinghouse.market import OracleSource
from clearinghouse.oracle import initialize_price
from clearinghouse.pubkey import Pubkey, find_program_address
from clearinghouse.tokens import AccountInfo

program_id = Pubkey.new_unique()
vault, _ = find_program_address([b"collateral_vault"], program_id)
vault_authority, _ = find_program_address([bytes(vault)], program_id)
insurance, _ = find_program_address([b"insurance_vault"], program_id)
insurance_authority, _ = find_program_address([bytes(insurance)], program_id)

house = ClearingHouse(program_id, Clock(unix_timestamp=1_700_000_000, slot=100))
admin = Pubkey.new_unique()
house.initialize(admin, Pubkey.new_unique(), vault_authority, insurance_authority)
house.initialize_history(admin)
house.initialize_order_state(admin)

price = initialize_price(
    price=5_000_000_000, conf=1_000_000, exponent=-8, ema_price=5_000_000_000, ema_conf=1_000_000
)
oracle = AccountInfo(key=Pubkey.new_unique(), owner=program_id, data=price.serialize())

market = house.initialize_market(
    admin, 0, oracle, 10**13, 10**13, 3600, 50_000, OracleSource.PYTH, 2000, 625, 500
)
assert market.amm.mark_price() == 500_000_000_000   # 50.0 at 1e10 precision
assert market.amm.last_oracle_price == 500_000_000_000

trader = Pubkey.new_unique()
house.initialize_user(trader)
house.deposit_collateral(trader, 1_000_000)
```

## What it does not do

- It keeps everything in memory. There is no storage and no command-line tool.
- `deposit_collateral` only checks the deposit. It moves no tokens and does not
  change the user's collateral or the deposit history.
- Only `OracleSource.PYTH` price accounts can be read. Listing a market with
  `OracleSource.SWITCHBOARD` raises `ValueError`.
- There is no trading, funding, liquidation or order matching. The record types
  and histories exist, but nothing writes to them.