"""
String tag tables for envelope kinds, collections and report labels.
"""


class Kind:
    COMMIT = "commit"
    IDENTITY = "identity"
    ACCOUNT = "account"


class Collection:
    POST = "app.bsky.feed.post"
    LIKE = "app.bsky.feed.like"
    REPOST = "app.bsky.feed.repost"
    FOLLOW = "app.bsky.graph.follow"
    BLOCK = "app.bsky.graph.block"
    THREADGATE = "app.bsky.feed.threadgate"
    PROFILE = "app.bsky.actor.profile"
    FEED_GENERATOR = "app.bsky.feed.generator"


class EventLabel:
    POST = "post"
    LIKE = "like"
    REPOST = "repost"
    FOLLOW = "follow"
    BLOCK = "block"
    THREADGATE = "threadgate"
    PROFILE = "profile"
    FEED_GENERATOR = "feed_generator"
    OTHER = "other"
    HANDLE_UPDATE = "handle_update"
    ACCOUNT_UPDATE = "account_update"
