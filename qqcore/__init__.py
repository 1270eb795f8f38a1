"""Protocol building blocks for a QQ chat client: auth profiles, devices, TLV, highway framing and notifications."""

__version__ = "0.1.0"