from .api_client import MockApiClient, make_product, make_subscription, make_uploads, make_video_file

__all__ = ['MockApiClient', 'make_product', 'make_subscription', 'make_uploads', 'make_video_file']
