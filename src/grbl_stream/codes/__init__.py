from .catalog import Catalog, ErrorCode, SettingCode, load_catalog

__all__ = ["Catalog", "ErrorCode", "SettingCode", "load_catalog"]
