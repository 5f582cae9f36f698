# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Utility for extracting data from ExternalResponse consistently
# ============================================================================
"""Response extraction utility.

The backend is inconsistent about envelopes: lists arrive wrapped
(``{"turnos": [...]}``, ``{"pagos": [...]}``) or raw, and ids come under
several names. These helpers hide that from the mapper and use cases.
"""

from typing import Any


class ResponseExtractor:
    """Utility for extracting data from ExternalResponse consistently.

    Example:
        >>> response = await client.obtener_turnos_paciente()
        >>> rows = ResponseExtractor.extract_items(response.data, "turnos")
        >>> turno_id = ResponseExtractor.get_field(rows[0], "turnoId", "turno_ID")
    """

    @staticmethod
    def as_dict(data: Any) -> dict[str, Any]:
        """Extract a dictionary from response data.

        - If data is dict: returns it directly
        - If data is list: returns first item if dict, else empty dict
        - Otherwise: returns empty dict
        """
        if isinstance(data, dict):
            return data
        if isinstance(data, list) and data:
            first_item = data[0]
            return first_item if isinstance(first_item, dict) else {}
        return {}

    @staticmethod
    def get_field(data: dict[str, Any], *keys: str, default: str = "") -> str:
        """Get a field value trying multiple keys (fallback pattern).

        Args:
            data: Dictionary to extract from.
            *keys: Field names to try in order.
            default: Value to return if no key is found.

        Returns:
            The first found value as string, or default.

        Example:
            >>> get_field({"turnoid": 42}, "turnoId", "turnoid", "id")
            "42"
        """
        for key in keys:
            value = data.get(key)
            if value is not None and value != "":
                return str(value)
        return default

    @staticmethod
    def extract_items(data: Any, *possible_keys: str) -> list[dict[str, Any]]:
        """Extract a list of items from a wrapped or raw list response.

        Args:
            data: Response data (dict or list).
            *possible_keys: Keys that might contain the list.

        Returns:
            List of dictionaries. A dict without any of the keys yields an
            empty list (an envelope with no items, not an item).

        Example:
            >>> extract_items({"turnos": [{"turnoId": 1}]}, "turnos")
            [{"turnoId": 1}]
        """
        if isinstance(data, list):
            return [item for item in data if isinstance(item, dict)]

        if isinstance(data, dict):
            for key in possible_keys:
                if key in data:
                    value = data[key]
                    if isinstance(value, list):
                        return [item for item in value if isinstance(item, dict)]
                    if isinstance(value, dict):
                        return [value]
                    return []
        return []
