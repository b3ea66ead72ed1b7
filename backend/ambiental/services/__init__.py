"""
Serviços de negócio
"""
from ambiental.services.dataset_store import DatasetSession, DatasetStore, dataset_store
from ambiental.services.data_processor import DataProcessor

__all__ = ['DatasetSession', 'DatasetStore', 'dataset_store', 'DataProcessor']
