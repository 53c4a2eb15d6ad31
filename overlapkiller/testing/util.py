import asyncio


def async_test(coro):
    def wrapper(*args, **kwargs):
        return asyncio.run(coro(*args, **kwargs))

    return wrapper


def service_object(name, namespace="default", cluster_ip=""):
    obj = {"metadata": {"name": name, "namespace": namespace}, "spec": {}}
    if cluster_ip:
        obj["spec"]["clusterIP"] = cluster_ip
    return obj


def pod_object(name, namespace="default", pod_ip=""):
    obj = {"metadata": {"name": name, "namespace": namespace}, "status": {}}
    if pod_ip:
        obj["status"]["podIP"] = pod_ip
    return obj
