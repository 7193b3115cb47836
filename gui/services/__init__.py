from .record_store import RecordStore, StoreStatus
from .image_staging import ImagePreview, ImageStagingBuffer
from .mutation_gateway import MutationGateway, MutationInFlightError
from .search_service import filter_records
