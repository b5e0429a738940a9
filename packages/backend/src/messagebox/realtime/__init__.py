"""Real-time infrastructure — Redis pub/sub.

Learn: Broadcasts flow through two hops:
1. Dispatcher → Redis PUBLISH (the redis broadcast driver)
2. Redis SUBSCRIBE → subscribers (websocket gateways, `messagebox listen`)

This decouples event producers from whoever delivers to end users.
"""
