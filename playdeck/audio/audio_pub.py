"""Playback publisher module for pub/sub status events."""

import logging

from pubsub import pub

from ..models.events import PlaybackEvent

logger = logging.getLogger(__name__)

PLAYBACK_TOPIC = "playback.status"


class PlaybackPublisher:
    """Publishes playback events using pubsub.pub."""

    def __init__(self, topic: str = PLAYBACK_TOPIC):
        """Initialize playback publisher.

        Args:
            topic: Pub/sub topic name for playback events
        """
        self.topic = topic
        logger.info(f"PlaybackPublisher initialized with topic: {topic}")

    def publish_event(self, event: PlaybackEvent) -> None:
        """Publish a playback event to the pub/sub topic.

        Args:
            event: PlaybackEvent to publish
        """
        pub.sendMessage(self.topic, event=event)
        logger.debug(f"Published playback event: {event.event_type.value} for {event.source_path}")

    def __call__(self, event: PlaybackEvent) -> None:
        self.publish_event(event)
