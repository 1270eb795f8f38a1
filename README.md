# qqcore

Protocol building blocks for a QQ chat client, in plain Python with no
third-party dependencies.

## Modules

- `qqcore.auth`: `ProtocolType` (with `version()` returning the built-in
  `AppVersion` for that protocol), the `SigType` signature bits, the
  `APP_VERSIONS` table, `AppVersion.update_from_json` for loading a version
  profile from JSON, and the `SigInfo` holder for login tickets and keys.
- `qqcore.device`: `Device` and `OSVersion`. `Device.to_json()` writes the
  device file form; `Device.read_json(data)` loads it (unknown protocol values
  fall back to `ANDROID_PAD`) and then derives the GUID and a fresh TGTGT key
  via `gen_new_guid()` and `gen_new_tgtgt_key()`.
- `qqcore.pow`: `calc_pow(data)`, which solves the SHA-256 proof-of-work
  challenge and returns the answer block.
- `qqcore.tlv`: `Decoder(tag_size, len_size)` for big-endian TLV records with
  1, 2 or 4 byte fields; `decode()` returns `Record` objects,
  `decode_record_map()` a tag-to-value dict. Truncated input raises
  `MessageTooShortError`.
- `qqcore.highway`: `frame(head, body)` for upload framing, `Addr` server
  addresses, and `Session`, which holds credentials, hands out sequence
  numbers and server addresses round-robin, and keeps up to seven idle
  `PersistConn` objects sorted by ping.
- `qqcore.network`: `TCPClient`, a blocking TCP connection that runs a
  callback on planned (`close`/reconnect) or unexpected (failed read or
  write) disconnects and raises `ConnectionClosedError`; also `Request`,
  `Packet`, `RequestParams`, `RequestType` and `EncryptType`.
- `qqcore.notice`: `parse_honor_page` for group honour pages,
  `parse_group_notice_json` for notice lists (regular feeds, then pinned),
  and `build_add_notice_body` / `build_delete_notice_body` for the form
  bodies that publish or delete a notice.
- `qqcore.notify`: poke, red-packet lucky-king, honour-change and
  special-title events, with `process_gray_tip`, `parse_tip_commands` and
  `parse_special_title_update` to produce them from gray-tip data.
- `qqcore.logger`: the `Logger` protocol and `ClientLog`, which forwards
  messages to a logger when one is set and drops them otherwise.
- `qqcore.forward`: `forward_display`, `forward_summary` and
  `preview_line` for the XML card of a forwarded chat record.
- `qqcore.security`: `UrlSecurityLevel` and `classify_url_check`.
- `qqcore.music`: `MusicType`, `music_type_info` and `rich_msg_style` for
  music share cards.
- `qqcore.servers`: `default_servers()`, `rank_servers(servers, pings)` and
  `ConnectionQualityInfo`.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Examples

Decode a TLV blob with two-byte tags and lengths:

```python
from qqcore.tlv import Decoder

records = Decoder(2, 2).decode_record_map(b"\x00\x01\x00\x02hi")
assert records[1] == b"hi"
```

Look up the app version for a protocol:

```python
from qqcore.auth import ProtocolType

version = ProtocolType.ANDROID_PHONE.version()
print(version)  # Android Phone 8.9.63.11390
```

Build a forwarded-message card:

```python
from qqcore.forward import forward_display, forward_summary, preview_line

xml = forward_display("", "MultiMsg", preview_line("Alice", "hello"), forward_summary(1))
```

Rank candidate servers by measured latency (with more than three servers,
only the faster half is kept):

```python
from qqcore.servers import default_servers, rank_servers

servers = default_servers()
fastest = rank_servers(servers, [30, 10, 9999, 40, 25, 60])
```

## What it does not do

This package is a set of pieces, not a working client. It does not log in,
send or receive messages, or keep a session with the chat servers. It does
not encode or decode protobuf messages, does not encrypt or decrypt packets,
and does not pack or unpack SSO frames. The highway module frames data and
pools connections but does not perform uploads. The notice module parses
responses and builds request bodies but makes no HTTP requests itself. The
servers module ranks servers from pings you supply; it does not measure
them. There is no command-line program.