"""签名、随机串与 XML 转换工具"""

import hashlib
import hmac
import re
import time
import uuid

from lxml import etree

from .constants import FIELD_SIGN, SignType

_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")


def generate_nonce_str() -> str:
    """生成随机字符串"""
    return uuid.uuid4().hex


def current_timestamp() -> str:
    """当前 Unix 时间戳（秒）"""
    return str(int(time.time()))


def _sign_content(data: dict[str, str], key: str) -> str:
    parts = []
    for k in sorted(data):
        if k == FIELD_SIGN:
            continue
        value = data[k]
        # 参数值为空不参与签名
        if value is None or not str(value).strip():
            continue
        parts.append(f"{k}={str(value).strip()}")
    parts.append(f"key={key}")
    return "&".join(parts)


def generate_signature(
    data: dict[str, str], key: str, sign_type: SignType = SignType.MD5
) -> str:
    """
    生成签名

    Args:
        data: 待签名数据，``sign`` 字段与空值会被忽略
        key: API 密钥
        sign_type: 签名方式

    Returns:
        大写十六进制签名
    """
    content = _sign_content(data, key).encode("utf-8")
    if sign_type == SignType.MD5:
        return hashlib.md5(content).hexdigest().upper()
    if sign_type == SignType.HMACSHA256:
        return hmac.new(key.encode("utf-8"), content, hashlib.sha256).hexdigest().upper()
    raise ValueError(f"Invalid sign_type: {sign_type}")


def is_signature_valid(
    data: dict[str, str], key: str, sign_type: SignType = SignType.MD5
) -> bool:
    """校验数据中的 sign 字段"""
    sign = data.get(FIELD_SIGN)
    if not sign:
        return False
    expected = generate_signature(data, key, sign_type)
    return hmac.compare_digest(expected, sign.upper())


def xml_to_dict(xml: str | bytes) -> dict[str, str]:
    """
    将微信支付的扁平 XML 转换为 dict，格式错误时抛出 lxml.etree.XMLSyntaxError

    bytes 按 XML 声明中的编码解析；str 已是解码后的文本，忽略其中的编码声明。
    """
    if isinstance(xml, str):
        xml = _XML_DECLARATION.sub("", xml, count=1)
    parser = etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)
    root = etree.fromstring(xml, parser=parser)
    data: dict[str, str] = {}
    for child in root:
        if isinstance(child.tag, str):
            data[child.tag] = (child.text or "").strip()
    return data


def dict_to_xml(data: dict[str, str]) -> str:
    """将 dict 转换为 ``<xml>`` 文档"""
    root = etree.Element("xml")
    for k, v in data.items():
        etree.SubElement(root, k).text = "" if v is None else str(v)
    return etree.tostring(root, encoding="unicode")
