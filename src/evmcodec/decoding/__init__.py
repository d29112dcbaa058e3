"""Value decoding for ABI-encoded EVM words.

This package provides:
- Type descriptors (BoolType, UintType, ..., parse_type, full_type)
- Decoded values and error results
- The suspendable decoder (decode_value) and its request protocol
- Drivers (run_decoder, arun_decoder, decode, adecode) and composite decoding
- A reference byte source over stack / memory / calldata / storage
"""

from evmcodec.decoding.decoder import decode_string, decode_value
from evmcodec.decoding.driver import adecode, arun_decoder, decode, decode_members, run_decoder
from evmcodec.decoding.errors import ErrorResult, ReadError, StopDecoding
from evmcodec.decoding.functions import decode_contract, decode_external_function, decode_internal_function
from evmcodec.decoding.requests import DecodeSession, Done, NeedsBytes, NeedsCode, ReadFailure
from evmcodec.decoding.types import full_type, parse_type

__all__ = [
    "decode_string",
    "decode_value",
    "adecode",
    "arun_decoder",
    "decode",
    "decode_members",
    "run_decoder",
    "ErrorResult",
    "ReadError",
    "StopDecoding",
    "decode_contract",
    "decode_external_function",
    "decode_internal_function",
    "DecodeSession",
    "Done",
    "NeedsBytes",
    "NeedsCode",
    "ReadFailure",
    "full_type",
    "parse_type",
]
