"""SNS publisher for the daily events digest."""
import logging
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)

# SNS rejects subjects longer than this
MAX_SUBJECT_LENGTH = 100


class SnsNotifier:
    """Publishes messages to a single SNS topic."""

    def __init__(self, topic_arn: Optional[str], sns_client: Any = None):
        """
        Initialize the notifier.

        Args:
            topic_arn: ARN of the target topic; None disables publishing
            sns_client: Optional boto3 SNS client (created on first publish)
        """
        self.topic_arn = topic_arn
        self._client = sns_client

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client('sns')
        return self._client

    def publish(self, message: str, subject: Optional[str] = None) -> Optional[str]:
        """
        Publish a message once. Failures are logged, never raised.

        Args:
            message: Message body
            subject: Optional subject for email subscriptions

        Returns:
            SNS message ID, or None if nothing was published
        """
        if not self.topic_arn:
            logger.error("SNS_TOPIC_ARN is not set; skipping publish")
            return None

        params = {
            'TopicArn': self.topic_arn,
            'Message': message
        }
        if subject:
            params['Subject'] = subject[:MAX_SUBJECT_LENGTH]

        try:
            response = self.client.publish(**params)
        except (ClientError, BotoCoreError) as e:
            logger.error(
                f"SNS publish failed: {e}",
                extra={'topic_arn': self.topic_arn, 'error_type': type(e).__name__}
            )
            return None

        message_id = response.get('MessageId')
        logger.info(
            f"SNS publish succeeded",
            extra={'topic_arn': self.topic_arn, 'message_id': message_id}
        )
        return message_id
