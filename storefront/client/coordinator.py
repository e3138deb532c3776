from __future__ import annotations

import inspect
from enum import Enum
from typing import Callable, List, Optional

from ..config import AppConfig, get_config
from ..errors import OrderValidationError
from ..logging import get_logger
from ..models import CartItem, OrderDraft, OrderForm
from .config_source import RemoteConfigSource
from .interface import LANDING_VIEW, CartProvider, DraftStore, Presenter, Resolver, Submitter
from .local_store import JsonFileDraftStore
from .resolver import EndpointResolver
from .strings import Localizer
from .submitter import OrderSubmitter
from .validation import validate_order_form


class OrderBuildFailed(Exception):
    """The order could not be assembled, so there is nothing to send or save."""


class SubmissionState(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"


class SubmissionResult(str, Enum):
    """What a single call to `SubmissionCoordinator.submit` ended with."""
    IGNORED = "ignored"      # another submission was already in flight
    REJECTED = "rejected"    # validation failed, nothing was sent
    SUCCESS = "success"
    FAILED = "failed"


class SubmissionCoordinator:
    """
    Drives one checkout submission from the form to a single user-facing outcome.

    Flow: validate, build the order, resolve the endpoint, POST it, and fall back
    to the local draft store when there is no endpoint or the POST fails. Only one
    submission runs at a time; the in-flight flag is set before the first await
    and cleared on every exit path.
    """

    def __init__(
        self,
        cart: CartProvider,
        drafts: DraftStore,
        presenter: Presenter,
        resolver: Resolver,
        submitter: Submitter,
        t: Optional[Callable[[str], str]] = None,
    ) -> None:
        self.cart = cart
        self.drafts = drafts
        self.presenter = presenter
        self.resolver = resolver
        self.submitter = submitter
        self.t = t or Localizer()
        self.state = SubmissionState.IDLE
        self.in_flight = False
        self.logger = get_logger(__name__)

    @classmethod
    def from_config(
        cls,
        cart: CartProvider,
        presenter: Presenter,
        t: Optional[Callable[[str], str]] = None,
        config: Optional[AppConfig] = None,
    ) -> "SubmissionCoordinator":
        """Wire the HTTP resolver/submitter and the JSON file draft store from settings."""
        config = config or get_config()
        source = RemoteConfigSource(config.store_data_url) if config.store_data_url else None
        return cls(
            cart=cart,
            drafts=JsonFileDraftStore(config.local_store_path),
            presenter=presenter,
            resolver=EndpointResolver.from_config(source, config),
            submitter=OrderSubmitter(timeout=config.request_timeout_seconds, secure_page=config.page_secure),
            t=t,
        )

    async def submit(self, form: OrderForm) -> SubmissionResult:
        if self.in_flight:
            self.logger.info("Submit ignored (already in progress)")
            return SubmissionResult.IGNORED

        items = self._checkout_items()
        try:
            validate_order_form(form, items, self.t)
        except OrderValidationError as exc:
            self.logger.info(f"Order rejected by validation: {exc.key}")
            self.presenter.alert(exc.message)
            return SubmissionResult.REJECTED

        self.in_flight = True
        self.state = SubmissionState.SUBMITTING
        failure_key = "orderSaveError"
        try:
            self._set_control(False, "submitting")
            saved = await self._deliver(form, items)
        except OrderBuildFailed:
            saved = False
            failure_key = "orderBuildError"
        except Exception as exc:
            self.logger.exception(f"Submit flow error: {exc}")
            saved = False
        finally:
            self.in_flight = False

        if saved:
            return self._finish_success()
        return self._finish_failure(self.t(failure_key))

    # ---------- workflow steps ----------

    async def _deliver(self, form: OrderForm, items: List[CartItem]) -> bool:
        try:
            order = OrderDraft.build(form, items, self.cart.total())
        except Exception as exc:
            self.logger.error(f"Building order failed: {exc}")
            raise OrderBuildFailed() from exc

        self.logger.info(f"Submitting order for {order.full_name}: total {order.total}, {len(order.items)} items")
        try:
            url = await self.resolver.resolve()
            if url:
                if await self.submitter.submit(url, order):
                    return True
                self.logger.warning("Orders API did not accept the order, saving locally")
            else:
                self.logger.info("No orders API URL configured, saving locally only")
        except Exception as exc:
            self.logger.error(f"Submit flow error, saving locally as last resort: {exc}")
        return await self._save_locally(order)

    async def _save_locally(self, order: OrderDraft) -> bool:
        try:
            pending = self.drafts.append_order(order)
            if inspect.isawaitable(pending):
                await pending
        except Exception as exc:
            self.logger.error(f"Local save failed: {exc}")
            return False
        return True

    def _set_control(self, enabled: bool, label_key: str) -> None:
        try:
            self.presenter.set_submit_control(enabled, self.t(label_key))
        except Exception as exc:
            self.logger.warning(f"Updating submit control failed: {exc}")

    def _checkout_items(self) -> List[CartItem]:
        try:
            return list(self.drafts.load_checkout_cart())
        except Exception as exc:
            self.logger.warning(f"Reading checkout cart failed: {exc}")
            return []

    # ---------- terminal outcomes ----------

    def _finish_success(self) -> SubmissionResult:
        self.state = SubmissionState.SUCCESS
        self._set_control(True, "confirmOrder")
        try:
            self.cart.clear()
        except Exception as exc:
            self.logger.warning(f"Clearing cart after order failed: {exc}")
        try:
            self.drafts.clear_checkout_cart()
        except Exception as exc:
            self.logger.warning(f"Clearing checkout snapshot failed: {exc}")
        self.presenter.alert(self.t("orderSuccess"))
        self.presenter.navigate(LANDING_VIEW)
        return SubmissionResult.SUCCESS

    def _finish_failure(self, message: str) -> SubmissionResult:
        self._set_control(True, "confirmOrder")
        self.presenter.alert(message)
        self.state = SubmissionState.IDLE
        return SubmissionResult.FAILED

