"""Monitor models: shared base fields and HTTP, probe and service monitor types."""