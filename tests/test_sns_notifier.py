"""Unit tests for SnsNotifier."""
import json
from unittest.mock import Mock

import boto3
import pytest
from botocore.exceptions import ClientError, EndpointConnectionError
from moto import mock_aws

from notifier.sns_notifier import SnsNotifier


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake credentials so boto3 never reaches real AWS."""
    monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'testing')
    monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'testing')
    monkeypatch.setenv('AWS_DEFAULT_REGION', 'us-east-1')


@pytest.fixture
def sns_topic(aws_credentials):
    """Create a mock SNS topic with an SQS subscriber to capture messages."""
    with mock_aws():
        sns = boto3.client('sns', region_name='us-east-1')
        sqs = boto3.client('sqs', region_name='us-east-1')

        topic_arn = sns.create_topic(Name='daily-events')['TopicArn']
        queue_url = sqs.create_queue(QueueName='daily-events-inbox')['QueueUrl']
        queue_arn = sqs.get_queue_attributes(
            QueueUrl=queue_url,
            AttributeNames=['QueueArn']
        )['Attributes']['QueueArn']
        sns.subscribe(TopicArn=topic_arn, Protocol='sqs', Endpoint=queue_arn)

        yield {'topic_arn': topic_arn, 'sqs': sqs, 'queue_url': queue_url}


def received_messages(sns_topic):
    response = sns_topic['sqs'].receive_message(
        QueueUrl=sns_topic['queue_url'],
        MaxNumberOfMessages=10
    )
    return [json.loads(m['Body']) for m in response.get('Messages', [])]


class TestSnsNotifier:
    """Test cases for SnsNotifier class."""

    def test_publish_success(self, sns_topic):
        notifier = SnsNotifier(sns_topic['topic_arn'])

        message_id = notifier.publish(
            'Friday 03-15-2024: No events today.',
            subject='Daily Events - Friday 03-15-2024'
        )

        assert message_id is not None
        messages = received_messages(sns_topic)
        assert len(messages) == 1
        assert messages[0]['Message'] == 'Friday 03-15-2024: No events today.'
        assert messages[0]['Subject'] == 'Daily Events - Friday 03-15-2024'

    def test_missing_topic_is_noop(self):
        sns_client = Mock()
        notifier = SnsNotifier(None, sns_client=sns_client)

        assert notifier.publish('hello') is None
        sns_client.publish.assert_not_called()

    def test_client_error_is_logged_not_raised(self):
        sns_client = Mock()
        sns_client.publish.side_effect = ClientError(
            {'Error': {'Code': 'NotFound', 'Message': 'Topic does not exist'}},
            'Publish'
        )
        notifier = SnsNotifier('arn:aws:sns:us-east-1:123456789012:missing', sns_client=sns_client)

        assert notifier.publish('hello') is None
        sns_client.publish.assert_called_once()

    def test_connection_error_is_logged_not_raised(self):
        sns_client = Mock()
        sns_client.publish.side_effect = EndpointConnectionError(
            endpoint_url='https://sns.us-east-1.amazonaws.com'
        )
        notifier = SnsNotifier('arn:aws:sns:us-east-1:123456789012:daily', sns_client=sns_client)

        assert notifier.publish('hello') is None

    def test_subject_is_truncated(self):
        sns_client = Mock()
        sns_client.publish.return_value = {'MessageId': 'abc-123'}
        notifier = SnsNotifier('arn:aws:sns:us-east-1:123456789012:daily', sns_client=sns_client)

        message_id = notifier.publish('hello', subject='x' * 150)

        assert message_id == 'abc-123'
        kwargs = sns_client.publish.call_args.kwargs
        assert len(kwargs['Subject']) == 100

    def test_no_subject(self):
        sns_client = Mock()
        sns_client.publish.return_value = {'MessageId': 'abc-123'}
        notifier = SnsNotifier('arn:aws:sns:us-east-1:123456789012:daily', sns_client=sns_client)

        notifier.publish('hello')

        sns_client.publish.assert_called_once_with(
            TopicArn='arn:aws:sns:us-east-1:123456789012:daily',
            Message='hello'
        )
