"""
endpoints.py – Per-resource wrappers around LBankRestClient.

Each group is written once and works in both transport modes: methods
return whatever ``LBankRestClient.call`` returns, i.e. the body text on a
blocking client and an awaitable of it on an async client.

    market = MarketAPI(LBankRestClient())
    text   = market.depth("lbk_usdt", 5)

    amarket = MarketAPI(LBankRestClient(mode=TransportMode.ASYNC))
    text    = await amarket.depth("lbk_usdt", 5)

Optional arguments left as None are not sent.  Private endpoints sign
their parameters with the client's credential before anything touches
the network, so a missing or malformed secret fails without a request
being made.
"""

from __future__ import annotations

from typing import Optional

from . import api
from .rest import LBankRestClient, Path, Response
from .signing import build_query_string


def _params(**kwargs: object) -> dict[str, str]:
    """Drop None values and stringify the rest."""
    return {key: str(value) for key, value in kwargs.items() if value is not None}


class _EndpointGroup:
    def __init__(self, client: LBankRestClient) -> None:
        self._client = client

    @property
    def client(self) -> LBankRestClient:
        return self._client

    def _public_get(self, path: Path, **params: object) -> Response:
        query = build_query_string(_params(**params))
        return self._client.call("GET", path, query or None)

    def _public_post(self, path: Path) -> Response:
        return self._client.call("POST", path)

    def _signed_post(self, path: Path, **params: object) -> Response:
        return self._client.call("POST", path, self._client.sign(_params(**params)))


# ---------------------------------------------------------------------------
# Public
# ---------------------------------------------------------------------------

class CommonAPI(_EndpointGroup):
    """Exchange-wide reference data."""

    def currency_pairs(self) -> Response:
        """List of available trading pairs."""
        return self._public_get(api.General.CURRENCY_PAIRS)

    def accuracy(self) -> Response:
        """Price/quantity precision and minimum order size for every pair."""
        return self._public_get(api.General.ACCURACY)

    def withdraw_configs(self) -> Response:
        """Per-asset withdrawal configuration (deprecated by LBank)."""
        return self._public_get(api.General.WITHDRAW_CONFIGS)

    def asset_configs(self) -> Response:
        """Per-coin deposit/withdrawal configuration across chains."""
        return self._public_get(api.General.ASSET_CONFIGS)

    def time(self) -> Response:
        """Server time in epoch milliseconds."""
        return self._public_get(api.General.TIMESTAMP)


class MarketAPI(_EndpointGroup):
    """Public market data."""

    def system_ping(self) -> Response:
        return self._public_post(api.Market.SYSTEM_PING)

    def depth(self, symbol: str, size: int) -> Response:
        """Order book for ``symbol`` with ``size`` levels per side (1-200)."""
        return self._public_get(api.Market.DEPTH, symbol=symbol, size=size)

    def price(self, symbol: Optional[str] = None) -> Response:
        """Latest price for ``symbol``, or for every pair when omitted."""
        return self._public_get(api.Market.PRICE, symbol=symbol)

    def book_ticker(self, symbol: str) -> Response:
        return self._public_get(api.Market.BOOK_TICKER, symbol=symbol)

    def ticker_24hr(self, symbol: str) -> Response:
        """24h ticker; ``symbol`` may be "all"."""
        return self._public_get(api.Market.TICKER_24HR, symbol=symbol)

    def etf_ticker_24hr(self, symbol: str) -> Response:
        return self._public_get(api.Market.ETF_TICKER_24HR, symbol=symbol)

    def trades(self, symbol: str, size: int, time: Optional[int] = None) -> Response:
        """Recent trades, optionally only those after ``time`` (epoch ms)."""
        return self._public_get(api.Market.TRADES, symbol=symbol, size=size, time=time)

    def kline(self, symbol: str, size: int, kline_type: str, time: int) -> Response:
        """
        Candlesticks.

        kline_type : minute1/5/15/30, hour1/4/8/12, day1, week1, month1
        time       : start time in epoch seconds
        """
        return self._public_get(api.Market.KLINE, symbol=symbol, size=size, type=kline_type, time=time)


# ---------------------------------------------------------------------------
# Private
# ---------------------------------------------------------------------------

class WalletAPI(_EndpointGroup):
    """Balances, deposits and withdrawals."""

    def system_status(self) -> Response:
        """0 = maintenance, 1 = normal.  Not signed."""
        return self._public_post(api.Wallet.SYSTEM_STATUS)

    def user_info(self) -> Response:
        return self._signed_post(api.Wallet.USER_INFO)

    def withdraw(
        self,
        address: str,
        coin: str,
        amount: str,
        fee: str,
        network_name: Optional[str] = None,
        memo: Optional[str] = None,
        mark: Optional[str] = None,
        name: Optional[str] = None,
        withdraw_order_id: Optional[str] = None,
        type_: Optional[str] = None,
    ) -> Response:
        """
        Submit a withdrawal.

        ``type_="1"`` makes it an internal transfer to another LBank account,
        in which case ``address`` is the receiving account.
        """
        return self._signed_post(
            api.Wallet.WITHDRAW,
            address=address,
            coin=coin,
            amount=amount,
            fee=fee,
            networkName=network_name,
            memo=memo,
            mark=mark,
            name=name,
            withdrawOrderId=withdraw_order_id,
            type=type_,
        )

    def deposit_history(
        self,
        status: Optional[str] = None,
        coin: Optional[str] = None,
        start_time: Optional[int] = None,
        end_time: Optional[int] = None,
    ) -> Response:
        return self._signed_post(
            api.Wallet.DEPOSIT_HISTORY,
            status=status,
            coin=coin,
            startTime=start_time,
            endTime=end_time,
        )

    def withdraw_history(
        self,
        status: Optional[str] = None,
        coin: Optional[str] = None,
        withdraw_order_id: Optional[str] = None,
        start_time: Optional[int] = None,
        end_time: Optional[int] = None,
    ) -> Response:
        return self._signed_post(
            api.Wallet.WITHDRAW_HISTORY,
            status=status,
            coin=coin,
            withdrawOrderId=withdraw_order_id,
            startTime=start_time,
            endTime=end_time,
        )

    def deposit_address(self, coin: str, network_name: Optional[str] = None) -> Response:
        return self._signed_post(api.Wallet.DEPOSIT_ADDRESS, coin=coin, networkName=network_name)

    def asset_detail(self, coin: Optional[str] = None) -> Response:
        return self._signed_post(api.Wallet.ASSET_DETAIL, coin=coin)


class SpotAPI(_EndpointGroup):
    """
    Spot order management.

    Order ``type_`` values: buy, sell, buy_market, sell_market, buy_maker,
    sell_maker, buy_ioc, sell_ioc, buy_fok, sell_fok.
    """

    def create_order_test(
        self,
        symbol: str,
        type_: str,
        price: Optional[str] = None,
        amount: Optional[str] = None,
        custom_id: Optional[str] = None,
        window: Optional[int] = None,
    ) -> Response:
        """Validate an order without placing it."""
        return self._signed_post(
            api.Spot.ORDER_TEST,
            symbol=symbol, type=type_, price=price, amount=amount, custom_id=custom_id, window=window,
        )

    def create_order(
        self,
        symbol: str,
        type_: str,
        price: Optional[str] = None,
        amount: Optional[str] = None,
        custom_id: Optional[str] = None,
        window: Optional[int] = None,
    ) -> Response:
        """
        Place an order.

        window : optional expiry in milliseconds after which the exchange
                 rejects the order
        """
        return self._signed_post(
            api.Spot.CREATE_ORDER,
            symbol=symbol, type=type_, price=price, amount=amount, custom_id=custom_id, window=window,
        )

    def cancel_order(
        self,
        symbol: str,
        order_id: Optional[str] = None,
        orig_client_order_id: Optional[str] = None,
    ) -> Response:
        """Cancel by exchange order id or by custom id (one is required)."""
        if order_id is None and orig_client_order_id is None:
            raise ValueError("either order_id or orig_client_order_id is required")
        return self._signed_post(
            api.Spot.CANCEL_ORDER,
            symbol=symbol, orderId=order_id, origClientOrderId=orig_client_order_id,
        )

    def cancel_order_by_symbol(self, symbol: str) -> Response:
        """Cancel every open order on ``symbol``."""
        return self._signed_post(api.Spot.CANCEL_ORDER_BY_SYMBOL, symbol=symbol)

    def order_info(
        self,
        symbol: str,
        order_id: Optional[str] = None,
        orig_client_order_id: Optional[str] = None,
    ) -> Response:
        if order_id is None and orig_client_order_id is None:
            raise ValueError("either order_id or orig_client_order_id is required")
        return self._signed_post(
            api.Spot.ORDER_INFO,
            symbol=symbol, orderId=order_id, origClientOrderId=orig_client_order_id,
        )

    def open_orders(self, symbol: str, current_page: int, page_length: int) -> Response:
        return self._signed_post(
            api.Spot.OPEN_ORDERS,
            symbol=symbol, current_page=current_page, page_length=page_length,
        )

    def order_history(
        self,
        symbol: str,
        current_page: int,
        page_length: int,
        status: Optional[str] = None,
    ) -> Response:
        """Orders of the last 24 hours unless narrowed by ``status``."""
        return self._signed_post(
            api.Spot.ORDER_HISTORY,
            symbol=symbol, current_page=current_page, page_length=page_length, status=status,
        )

    def account_info(self) -> Response:
        return self._signed_post(api.Spot.ACCOUNT_INFO)

    def transaction_history(
        self,
        symbol: str,
        start_time: Optional[str] = None,
        end_time: Optional[str] = None,
        from_id: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> Response:
        """
        Executed trades.

        start_time / end_time : "yyyy-MM-dd" or "yyyy-MM-dd HH:mm:ss" (UTC+8),
                                at most two days apart
        limit                 : 1-100, default 100
        """
        return self._signed_post(
            api.Spot.TRANSACTION_HISTORY,
            symbol=symbol, startTime=start_time, endTime=end_time, fromId=from_id, limit=limit,
        )


class AccountAPI(_EndpointGroup):
    """Account-level settings."""

    def trade_fee_rate(self, category: Optional[str] = None) -> Response:
        """Maker/taker fee rates, optionally for a single pair."""
        return self._signed_post(api.Account.TRADE_FEE_RATE, category=category)

    def api_restrictions(self) -> Response:
        """Permissions of the API key in use."""
        return self._signed_post(api.Account.API_RESTRICTIONS)

    def account_info(self) -> Response:
        return self._signed_post(api.Account.ACCOUNT_INFO)
