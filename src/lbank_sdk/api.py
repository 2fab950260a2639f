"""
api.py – LBank v2 REST endpoint paths.

Each enum member's value is the path appended to Config.rest_api_endpoint.
The members are ``str`` subclasses, so they can be passed anywhere a path
string is expected.
"""

from __future__ import annotations

from enum import Enum, unique


@unique
class General(str, Enum):
    CURRENCY_PAIRS   = "/v2/currencyPairs.do"
    ACCURACY         = "/v2/accuracy.do"
    WITHDRAW_CONFIGS = "/v2/withdrawConfigs.do"
    ASSET_CONFIGS    = "/v2/assetConfigs.do"
    TIMESTAMP        = "/v2/timestamp.do"


@unique
class Market(str, Enum):
    SYSTEM_PING     = "/v2/supplement/system_ping.do"
    DEPTH           = "/v2/depth.do"
    PRICE           = "/v2/supplement/ticker/price.do"
    BOOK_TICKER     = "/v2/supplement/ticker/bookTicker.do"
    TICKER_24HR     = "/v2/ticker/24hr.do"
    ETF_TICKER_24HR = "/v2/etfTicker/24hr.do"
    TRADES          = "/v2/supplement/trades.do"
    KLINE           = "/v2/kline.do"


@unique
class Wallet(str, Enum):
    SYSTEM_STATUS    = "/v2/supplement/system_status.do"
    USER_INFO        = "/v2/supplement/user_info.do"
    WITHDRAW         = "/v2/supplement/withdraw.do"
    DEPOSIT_HISTORY  = "/v2/supplement/deposit_history.do"
    WITHDRAW_HISTORY = "/v2/supplement/withdraws.do"
    DEPOSIT_ADDRESS  = "/v2/supplement/get_deposit_address.do"
    ASSET_DETAIL     = "/v2/supplement/asset_detail.do"


@unique
class Spot(str, Enum):
    ORDER_TEST             = "/v2/supplement/create_order_test.do"
    CREATE_ORDER           = "/v2/supplement/create_order.do"
    CANCEL_ORDER           = "/v2/supplement/cancel_order.do"
    CANCEL_ORDER_BY_SYMBOL = "/v2/supplement/cancel_order_by_symbol.do"
    ORDER_INFO             = "/v2/supplement/orders_info.do"
    OPEN_ORDERS            = "/v2/supplement/orders_info_no_deal.do"
    ORDER_HISTORY          = "/v2/supplement/orders_info_history.do"
    ACCOUNT_INFO           = "/v2/supplement/user_info_account.do"
    TRANSACTION_HISTORY    = "/v2/supplement/transaction_history.do"


@unique
class Account(str, Enum):
    TRADE_FEE_RATE   = "/v2/supplement/customer_trade_fee.do"
    API_RESTRICTIONS = "/v2/supplement/api_Restrictions.do"
    ACCOUNT_INFO     = "/v2/supplement/user_info_account.do"
