"""Objects defined in the Jamf Pro API schema under components => schemas"""

from .building import Building
from .category import Category
from .computer_inventory_file_vault import ComputerInventoryFileVault
from .computer_partition_encryption import ComputerPartitionEncryption
from .department import Department
from .extension_attribute import ExtensionAttribute
from .id_and_name import IdAndName
from .mobile_device_details import MobileDeviceDetails
