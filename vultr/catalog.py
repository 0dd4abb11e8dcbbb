"""
Endpoint catalog for the Vultr v1 API.

One row per remote operation. Rows are pure declarations; the client
generates a method for each and hands the finished request to the engine.

GET rows list their required query parameters in `params` (positional on
the generated method) and optional ones in `optional` (keyword only).
POST rows send everything as a form body; `params` there only names the
fields the API requires.
"""

from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import urlencode

from vultr.types import Verb


@dataclass(frozen=True)
class Endpoint:
    """A declarative (verb, path, parameters) catalog row."""

    name: str
    verb: Verb
    path: str
    params: tuple[str, ...] = ()
    optional: tuple[str, ...] = ()
    doc: str = ""


def _get(name, path, params=(), optional=(), doc=""):
    return Endpoint(name, Verb.GET, path, tuple(params), tuple(optional), doc)


def _post(name, path, params=(), doc=""):
    return Endpoint(name, Verb.POST, path, tuple(params), (), doc)


ENDPOINTS: tuple[Endpoint, ...] = (
    # account / app / auth
    _get("get_account_info", "/v1/account/info",
         doc="Retrieve information about the current account."),
    _get("get_applications", "/v1/app/list",
         doc="List applications that can be launched when creating a VPS."),
    _get("get_auth_info", "/v1/auth/info",
         doc="Retrieve information about the current API key."),

    # backup
    _get("get_backups", "/v1/backup/list", optional=("SUBID", "BACKUPID"),
         doc="List all backups on the current account."),

    # baremetal
    _post("change_baremetal_app", "/v1/baremetal/app_change", ("SUBID", "APPID")),
    _get("get_baremetal_app_change_list", "/v1/baremetal/app_change_list", ("SUBID",)),
    _get("get_baremetal_bandwidth", "/v1/baremetal/bandwidth", ("SUBID",)),
    _post("create_baremetal", "/v1/baremetal/create", ("DCID", "METALPLANID", "OSID"),
          doc="Create a new bare metal server."),
    _post("destroy_baremetal", "/v1/baremetal/destroy", ("SUBID",),
          doc="Destroy a bare metal server. All data will be permanently lost."),
    _post("enable_baremetal_ipv6", "/v1/baremetal/ipv6_enable", ("SUBID",)),
    _get("get_baremetal_app_info", "/v1/baremetal/get_app_info", ("SUBID",)),
    _get("get_baremetal_user_data", "/v1/baremetal/get_user_data", ("SUBID",)),
    _post("halt_baremetal", "/v1/baremetal/halt", ("SUBID",)),
    _get("get_baremetal_ipv4", "/v1/baremetal/list_ipv4", ("SUBID",)),
    _get("get_baremetal_ipv6", "/v1/baremetal/list_ipv6", ("SUBID",)),
    _post("set_baremetal_label", "/v1/baremetal/label_set", ("SUBID", "label")),
    _get("get_baremetals", "/v1/baremetal/list",
         optional=("SUBID", "tag", "label", "main_ip")),
    _post("change_baremetal_os", "/v1/baremetal/os_change", ("SUBID", "OSID")),
    _get("get_baremetal_os_change_list", "/v1/baremetal/os_change_list", ("SUBID",)),
    _post("reboot_baremetal", "/v1/baremetal/reboot", ("SUBID",)),
    _post("reinstall_baremetal", "/v1/baremetal/reinstall", ("SUBID",)),
    _post("set_baremetal_user_data", "/v1/baremetal/set_user_data", ("SUBID", "userdata")),
    _post("set_baremetal_tag", "/v1/baremetal/tag_set", ("SUBID", "tag")),

    # block storage
    _post("attach_block", "/v1/block/attach", ("SUBID", "attach_to_SUBID"),
          doc="Attach a block storage subscription to a VPS subscription."),
    _post("create_block", "/v1/block/create", ("DCID", "size_gb"),
          doc="Create a block storage subscription."),
    _post("delete_block", "/v1/block/delete", ("SUBID",),
          doc="Delete a block storage subscription. All data will be permanently lost."),
    _post("detach_block", "/v1/block/detach", ("SUBID",),
          doc="Detach a block storage subscription from its instance."),
    _post("set_block_label", "/v1/block/label_set", ("SUBID", "label"),
          doc="Set the label of a block storage subscription."),
    _get("get_blocks", "/v1/block/list", optional=("SUBID",),
         doc="List active block storage subscriptions on this account."),
    _post("resize_block", "/v1/block/resize", ("SUBID", "size_gb"),
          doc="Resize a block storage volume. Shrink the filesystem first when shrinking."),

    # dns
    _post("create_domain", "/v1/dns/create_domain", ("domain", "serverip"),
          doc="Create a domain name in DNS."),
    _post("create_record", "/v1/dns/create_record", ("domain", "name", "type", "data"),
          doc="Add a DNS record."),
    _post("delete_domain", "/v1/dns/delete_domain", ("domain",),
          doc="Delete a domain name and all associated records."),
    _post("delete_record", "/v1/dns/delete_record", ("domain", "RECORDID"),
          doc="Delete an individual DNS record."),
    _post("enable_dnssec", "/v1/dns/dnssec_enable", ("domain", "enable")),
    _get("get_dnssec_info", "/v1/dns/dnssec_info", ("domain",)),
    _get("get_domains", "/v1/dns/list",
         doc="List all domains associated with the current account."),
    _get("get_records", "/v1/dns/records", ("domain",),
         doc="List all the records associated with a particular domain."),
    _get("get_soa_info", "/v1/dns/soa_info", ("domain",)),
    _post("update_soa", "/v1/dns/soa_update", ("domain",)),
    _post("update_record", "/v1/dns/update_record", ("domain", "RECORDID"),
          doc="Update a DNS record."),

    # firewall
    _post("create_firewall_group", "/v1/firewall/group_create"),
    _post("delete_firewall_group", "/v1/firewall/group_delete", ("FIREWALLGROUPID",)),
    _get("get_firewall_groups", "/v1/firewall/group_list", optional=("FIREWALLGROUPID",)),
    _post("set_firewall_group_description", "/v1/firewall/group_set_description",
          ("FIREWALLGROUPID", "description")),
    _post("create_firewall_rule", "/v1/firewall/rule_create",
          ("FIREWALLGROUPID", "direction", "ip_type", "protocol", "subnet", "subnet_size")),
    _post("delete_firewall_rule", "/v1/firewall/rule_delete", ("FIREWALLGROUPID", "rulenumber")),
    _get("get_firewall_rules", "/v1/firewall/rule_list",
         ("FIREWALLGROUPID", "direction", "ip_type")),

    # iso
    _post("create_image_from_url", "/v1/iso/create_from_url", ("url",)),
    _get("get_images", "/v1/iso/list",
         doc="List all ISOs currently available on this account."),
    _get("get_public_images", "/v1/iso/list_public"),

    # private networks
    _post("create_network", "/v1/network/create", ("DCID",)),
    _post("destroy_network", "/v1/network/destroy", ("NETWORKID",)),
    _get("get_networks", "/v1/network/list"),

    # object storage
    _post("create_object_storage", "/v1/objectstorage/create", ("OBJSTORECLUSTERID",)),
    _post("destroy_object_storage", "/v1/objectstorage/destroy", ("SUBID",)),
    _post("set_object_storage_label", "/v1/objectstorage/label_set", ("SUBID", "label")),
    _get("get_object_storages", "/v1/objectstorage/list", optional=("SUBID", "label")),
    _get("get_object_storage_clusters", "/v1/objectstorage/list_cluster"),
    _post("regenerate_object_storage_keys", "/v1/objectstorage/s3key_regenerate",
          ("SUBID", "s3_access_key")),

    # os
    _get("get_os", "/v1/os/list",
         doc="List available operating systems."),

    # plans
    _get("get_plans", "/v1/plans/list", optional=("type",),
         doc="List all active plans. Deprecated plans stay listed for about 30 days."),
    _get("get_baremetal_plans", "/v1/plans/list_baremetal"),
    _get("get_vc2_plans", "/v1/plans/list_vc2",
         doc="List all active vc2 plans."),
    _get("get_vdc2_plans", "/v1/plans/list_vdc2",
         doc="List all active vdc2 plans."),
    _get("get_vc2z_plans", "/v1/plans/list_vc2z"),

    # regions
    _get("get_region_availability", "/v1/regions/availability", ("DCID",),
         optional=("type",),
         doc="List the VPSPLANIDs currently available in this location."),
    _get("get_region_baremetal_availability", "/v1/regions/availability_baremetal", ("DCID",)),
    _get("get_region_vc2_availability", "/v1/regions/availability_vc2", ("DCID",)),
    _get("get_region_vdc2_availability", "/v1/regions/availability_vdc2", ("DCID",)),
    _get("get_regions", "/v1/regions/list", optional=("availability",),
         doc="List all active regions. Listed does not mean there is room for new servers."),

    # reserved ips
    _post("attach_reserved_ip", "/v1/reservedip/attach", ("ip_address", "attach_SUBID")),
    _post("convert_reserved_ip", "/v1/reservedip/convert", ("SUBID", "ip_address")),
    _post("create_reserved_ip", "/v1/reservedip/create", ("DCID", "ip_type")),
    _post("destroy_reserved_ip", "/v1/reservedip/destroy", ("ip_address",)),
    _post("detach_reserved_ip", "/v1/reservedip/detach", ("ip_address", "detach_SUBID")),
    _get("get_reserved_ips", "/v1/reservedip/list"),

    # server
    _post("change_server_app", "/v1/server/app_change", ("SUBID", "APPID")),
    _get("get_server_app_change_list", "/v1/server/app_change_list", ("SUBID",)),
    _post("disable_server_backup", "/v1/server/backup_disable", ("SUBID",)),
    _post("enable_server_backup", "/v1/server/backup_enable", ("SUBID",)),
    _post("get_server_backup_schedule", "/v1/server/backup_get_schedule", ("SUBID",)),
    _post("set_server_backup_schedule", "/v1/server/backup_set_schedule", ("SUBID", "cron_type")),
    _get("get_server_bandwidth", "/v1/server/bandwidth", ("SUBID",)),
    _post("create_server", "/v1/server/create", ("DCID", "VPSPLANID", "OSID"),
          doc="Create a new virtual machine."),
    _post("create_server_ipv4", "/v1/server/create_ipv4", ("SUBID",)),
    _post("destroy_server", "/v1/server/destroy", ("SUBID",),
          doc="Destroy a virtual machine. All data will be permanently lost."),
    _post("destroy_server_ipv4", "/v1/server/destroy_ipv4", ("SUBID", "ip")),
    _post("set_server_firewall_group", "/v1/server/firewall_group_set",
          ("SUBID", "FIREWALLGROUPID")),
    _get("get_server_app_info", "/v1/server/get_app_info", ("SUBID",)),
    _get("get_server_user_data", "/v1/server/get_user_data", ("SUBID",)),
    _post("halt_server", "/v1/server/halt", ("SUBID",)),
    _post("attach_server_iso", "/v1/server/iso_attach", ("SUBID", "ISOID")),
    _post("detach_server_iso", "/v1/server/iso_detach", ("SUBID",)),
    _get("get_server_iso_status", "/v1/server/iso_status", ("SUBID",)),
    _post("set_server_label", "/v1/server/label_set", ("SUBID", "label")),
    _get("get_servers", "/v1/server/list", optional=("SUBID", "tag", "label", "main_ip")),
    _get("get_server_ipv4", "/v1/server/list_ipv4", ("SUBID",), optional=("public_network",)),
    _get("get_server_ipv6", "/v1/server/list_ipv6", ("SUBID",)),
    _get("get_server_neighbors", "/v1/server/neighbors", ("SUBID",)),
    _post("change_server_os", "/v1/server/os_change", ("SUBID", "OSID")),
    _get("get_server_os_change_list", "/v1/server/os_change_list", ("SUBID",)),
    _post("disable_server_private_network", "/v1/server/private_network_disable",
          ("SUBID", "NETWORKID")),
    _post("enable_server_private_network", "/v1/server/private_network_enable", ("SUBID",)),
    _get("get_server_private_networks", "/v1/server/private_networks", ("SUBID",)),
    _post("reboot_server", "/v1/server/reboot", ("SUBID",)),
    _post("reinstall_server", "/v1/server/reinstall", ("SUBID",)),
    _post("restore_server_backup", "/v1/server/restore_backup", ("SUBID", "BACKUPID")),
    _post("restore_server_snapshot", "/v1/server/restore_snapshot", ("SUBID", "SNAPSHOTID")),
    _post("set_server_default_reverse_ipv4", "/v1/server/reverse_default_ipv4", ("SUBID", "ip")),
    _post("delete_server_reverse_ipv6", "/v1/server/reverse_delete_ipv6", ("SUBID", "ip")),
    _get("get_server_reverse_ipv6", "/v1/server/reverse_list_ipv6", ("SUBID",)),
    _post("set_server_reverse_ipv4", "/v1/server/reverse_set_ipv4", ("SUBID", "ip", "entry")),
    _post("set_server_reverse_ipv6", "/v1/server/reverse_set_ipv6", ("SUBID", "ip", "entry")),
    _post("set_server_user_data", "/v1/server/set_user_data", ("SUBID", "userdata")),
    _post("start_server", "/v1/server/start", ("SUBID",)),
    _post("set_server_tag", "/v1/server/tag_set", ("SUBID", "tag")),
    _post("upgrade_server_plan", "/v1/server/upgrade_plan", ("SUBID", "VPSPLANID")),
    _get("get_server_upgrade_plan_list", "/v1/server/upgrade_plan_list", ("SUBID",)),

    # snapshots
    _post("create_snapshot", "/v1/snapshot/create", ("SUBID",)),
    _post("create_snapshot_from_url", "/v1/snapshot/create_from_url", ("url",)),
    _post("destroy_snapshot", "/v1/snapshot/destroy", ("SNAPSHOTID",)),
    _get("get_snapshots", "/v1/snapshot/list", optional=("SNAPSHOTID",)),

    # ssh keys
    _post("create_ssh_key", "/v1/sshkey/create", ("name", "ssh_key")),
    _post("destroy_ssh_key", "/v1/sshkey/destroy", ("SSHKEYID",)),
    _get("get_ssh_keys", "/v1/sshkey/list"),
    _post("update_ssh_key", "/v1/sshkey/update", ("SSHKEYID",)),

    # startup scripts
    _post("create_startup_script", "/v1/startupscript/create", ("name", "script")),
    _post("destroy_startup_script", "/v1/startupscript/destroy", ("SCRIPTID",)),
    _get("get_startup_scripts", "/v1/startupscript/list"),
    _post("update_startup_script", "/v1/startupscript/update", ("SCRIPTID",)),

    # users
    _post("create_user", "/v1/user/create", ("email", "name", "password", "acls")),
    _post("delete_user", "/v1/user/delete", ("USERID",)),
    _get("get_users", "/v1/user/list"),
    _post("update_user", "/v1/user/update", ("USERID",)),
)

CATALOG: dict[str, Endpoint] = {endpoint.name: endpoint for endpoint in ENDPOINTS}


def get_endpoint(name: str) -> Endpoint:
    """
    Look up a catalog row by operation name.

    Raises:
        AttributeError: Unknown operation
    """
    try:
        return CATALOG[name]
    except KeyError:
        raise AttributeError(f"Unknown Vultr API operation '{name}'") from None


def build_path(endpoint: Endpoint, args: tuple = (), kwargs: Mapping[str, Any] | None = None) -> str:
    """
    Substitute GET parameters into the endpoint path as a query string.

    Positional args fill `endpoint.params` in order; keyword args may name
    any required or optional parameter. None values are dropped.

    Raises:
        TypeError: Too many positional args, unknown keyword, or a missing
            required parameter
    """
    kwargs = dict(kwargs or {})
    known = endpoint.params + endpoint.optional

    if len(args) > len(endpoint.params):
        raise TypeError(
            f"{endpoint.name}() takes {len(endpoint.params)} positional "
            f"arguments but {len(args)} were given"
        )

    unknown = [key for key in kwargs if key not in known]
    if unknown:
        raise TypeError(f"{endpoint.name}() got unexpected arguments: {', '.join(unknown)}")

    query = dict(zip(endpoint.params, args))
    for key, value in kwargs.items():
        if key in query:
            raise TypeError(f"{endpoint.name}() got multiple values for '{key}'")
        query[key] = value

    missing = [name for name in endpoint.params if query.get(name) is None]
    if missing:
        raise TypeError(f"{endpoint.name}() missing required arguments: {', '.join(missing)}")

    ordered = [(name, query[name]) for name in known if query.get(name) is not None]
    if not ordered:
        return endpoint.path
    return f"{endpoint.path}?{urlencode(ordered)}"


def build_form(
    data: Mapping[str, Any] | None = None,
    fields: Mapping[str, Any] | None = None,
) -> dict[str, str]:
    """Merge a form mapping and keyword fields into string values. Keywords win."""
    form: dict[str, str] = {}
    for source in (data or {}, fields or {}):
        for key, value in source.items():
            if value is None:
                continue
            form[key] = str(value)
    return form
