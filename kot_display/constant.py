"""Editable static feed and bucket-layout configuration."""

from __future__ import annotations

RESTAURANT = "restaurant"
BAR = "bar"

FEED_PATHS: dict[str, str] = {
    RESTAURANT: "restaurant-orders",
    BAR: "bar-orders",
}

KITCHEN = "kitchen"
OTHER = "other"

ACTIVE_STATUSES: frozenset[str] = frozenset({"pending", "preparing"})
COMPLETED_STATUS = "completed"

# Tried in order; the first non-empty value is the item's display name.
ITEM_NAME_KEYS: tuple[str, ...] = ("name", "displayName", "itemName")

# Each bucket claims (origin feed, partition) pairs. Restaurant orders are never
# split and always land in the kitchen partition.
BUCKET_LAYOUTS: dict[str, dict[str, object]] = {
    "kitchen_bar": {
        "kitchen_categories": ["kitchen"],
        "buckets": [
            {
                "name": "kitchen",
                "title": "Kitchen Orders",
                "empty_message": "No kitchen orders to prepare right now",
                "sources": [(RESTAURANT, KITCHEN), (BAR, KITCHEN)],
            },
            {
                "name": "bar",
                "title": "Bar Orders",
                "empty_message": "No bar orders to prepare right now",
                "sources": [(BAR, OTHER)],
            },
        ],
    },
    "restaurant_bar": {
        "kitchen_categories": ["kitchen", "snack", "food", "snacks"],
        "buckets": [
            {
                "name": "restaurant",
                "title": "Restaurant",
                "empty_message": "No restaurant orders to prepare right now",
                "sources": [(RESTAURANT, KITCHEN)],
            },
            {
                "name": "bar-kitchen",
                "title": "Bar Kitchen",
                "empty_message": "No bar food to prepare right now",
                "sources": [(BAR, KITCHEN)],
            },
            {
                "name": "bar-drinks",
                "title": "Bar Drinks",
                "empty_message": "No drinks to prepare right now",
                "sources": [(BAR, OTHER)],
            },
        ],
    },
}
