"""Order attribute sink: stamps the accepted delivery date onto an order."""

from __future__ import annotations

import logging
import os
from datetime import date, datetime, timezone
from typing import Optional

import boto3
from botocore.exceptions import ClientError

from .models import OrderDeliveryDate, parse_iso_date

logger = logging.getLogger(__name__)


class OrderStore:
    def __init__(
        self,
        table_name: Optional[str] = None,
        region_name: Optional[str] = None,
        dynamodb_resource=None,
    ) -> None:
        self.table_name = table_name or os.environ.get("ORDER_TABLE_NAME") or os.environ.get("CONFIG_TABLE_NAME")
        if not self.table_name:
            raise ValueError("ORDER_TABLE_NAME or CONFIG_TABLE_NAME env var is required")

        endpoint_url = os.environ.get("DYNAMODB_ENDPOINT_URL")
        if endpoint_url:
            self._dynamodb = dynamodb_resource or boto3.resource(
                "dynamodb", region_name=region_name, endpoint_url=endpoint_url
            )
        else:
            self._dynamodb = dynamodb_resource or boto3.resource("dynamodb", region_name=region_name)
        self._table = self._dynamodb.Table(self.table_name)

    @staticmethod
    def _key(order_id: str):
        return {"PK": f"ORDER#{order_id}", "SK": "DELIVERY"}

    def set_delivery_date(self, order_id: str, delivery_date: date) -> None:
        value = delivery_date.isoformat()
        try:
            logger.info("Stamping delivery date %s on order %s", value, order_id)
            # billingDate mirrors the checkout field name older order views still read
            self._table.update_item(
                Key=self._key(order_id),
                UpdateExpression="SET deliveryDate = :date, billingDate = :date, updatedAt = :now",
                ExpressionAttributeValues={
                    ":date": value,
                    ":now": datetime.now(timezone.utc).isoformat(),
                },
            )
        except ClientError as error:
            logger.error("Failed to stamp delivery date on order %s: %s", order_id, error)
            raise RuntimeError(f"Failed to save delivery date for order {order_id}: {error}") from error

    def get_delivery_date(self, order_id: str) -> Optional[OrderDeliveryDate]:
        try:
            response = self._table.get_item(Key=self._key(order_id))
        except ClientError as error:
            raise RuntimeError(f"Failed to load order {order_id}: {error}") from error
        item = response.get("Item")
        if not item:
            return None
        stored = parse_iso_date(item.get("deliveryDate") or item.get("billingDate"))
        if stored is None:
            return None
        return OrderDeliveryDate(order_id, stored)
