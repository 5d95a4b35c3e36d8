# eas_offchain/codec/__init__.py
