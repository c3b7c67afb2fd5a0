"""
Export functionality for decoded packets.

Provides debugging dumps of packets as dicts, JSON and pandas DataFrames.
Every record carries the decoded header fields, the capture metadata and
the uppercase hex of the raw packet.

Examples:
    Export to pandas DataFrame:
        >>> from divertview import Packet, to_dataframe
        >>> df = to_dataframe(packets)
        >>> print(df[['ipv4.src_addr', 'tcp.dst_port', 'raw']])

    Export to JSON:
        >>> from divertview import to_json
        >>> to_json(packets, 'packets.json')
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Iterable
import json

if TYPE_CHECKING:
    from divertview.core.packet import Packet


def to_dict(packets: Iterable[Packet]) -> list[dict]:
    """
    Convert packets to a list of flat dictionaries.

    Header fields are prefixed with the header name
    (e.g. 'ipv4.ttl', 'tcp.seq_num'); bytes values are rendered as hex.

    Args:
        packets: Packets to convert

    Returns:
        One dictionary per packet
    """
    return [packet.to_dict() for packet in packets]


def to_json(
    packets: Iterable[Packet],
    path: str | Path | None = None,
    indent: int = 2
) -> str | None:
    """
    Export packets to JSON.

    Args:
        packets: Packets to export
        path: Output JSON file path; when omitted the JSON text is returned
        indent: JSON indentation level (default: 2)

    Returns:
        JSON text if no path was given, otherwise None
    """
    data = to_dict(packets)

    if path is None:
        return json.dumps(data, indent=indent, default=str)

    with open(Path(path), 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=indent, default=str)
    return None


def to_dataframe(packets: Iterable[Packet]) -> object:
    """
    Convert packets to pandas DataFrame.

    One row per packet. Packets of different protocols leave the columns
    of headers they lack as NaN.

    Raises:
        ImportError: If pandas is not installed
    """
    try:
        import pandas as pd
    except ImportError:
        raise ImportError("pandas is required for DataFrame export. Install with: pip install pandas")

    return pd.DataFrame(to_dict(packets))
