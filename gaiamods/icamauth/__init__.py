"""Interchain-account authentication: messages, keeper, message server and channel callbacks."""