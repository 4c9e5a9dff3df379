"""Store, account, role, event and activity services"""
