from satpass_client.infrastructure.storage.local_storage import FileStorage, KeyValueStore

__all__ = ["FileStorage", "KeyValueStore"]
