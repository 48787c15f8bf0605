"""Static tables used by the import path validator.

VALID_TLDS holds the allow-listed top-level domains, each with its leading
dot so it can be compared against ``os.path.splitext``-style extensions.
PATH_FLAGS classifies paths of the Go standard distribution.
"""

GO_REPO_PATH = 1
PACKAGE_PATH = 2

_GENERIC_TLDS = """
academy agency ai app art audio bar best bio biz blog build business cafe
camp capital care center chat city click cloud club codes coffee com
community company computer consulting cool dev design digital directory
domains edu email engineer engineering enterprises equipment exchange expert
foundation fun fyi game games garden gay gd global gmbh gov group guide guru
host house inc industries info ink institute int international io jobs land
lgbt life link live llc ltd media mil mobi moe money name net network news
ninja one online org page partners party photo photography pro productions
properties pub rocks run school science services sh shop site social software
solutions space store studio style support systems team tech technology tools
top training tv uno vip wiki win work works world wtf xyz zone
"""

_COUNTRY_TLDS = """
ac ad ae af ag al am ao aq ar as at au aw ax az ba bb bd be bf bg bh bi bj bm
bn bo br bs bt bw by bz ca cc cd cf cg ch ci ck cl cm cn co cr cu cv cw cx cy
cz de dj dk dm do dz ec ee eg er es et eu fi fj fk fm fo fr ga gb ge gf gg gh
gi gl gm gn gp gq gr gs gt gu gw gy hk hm hn hr ht hu id ie il im in iq ir is
it je jm jo jp ke kg kh ki km kn kp kr kw ky kz la lb lc li lk lr ls lt lu lv
ly ma mc md me mg mh mk ml mm mn mo mp mq mr ms mt mu mv mw mx my mz na nc ne
nf ng ni nl no np nr nu nz om pa pe pf pg ph pk pl pm pn pr ps pt pw py qa re
ro rs ru rw sa sb sc sd se sg si sk sl sm sn so sr ss st su sv sx sy sz tc td
tf tg th tj tk tl tm tn to tr tt tw tz ua ug uk us uy uz va vc ve vg vi vn vu
wf ws ye yt za zm zw
"""

VALID_TLDS = frozenset("." + tld for tld in (_GENERIC_TLDS + _COUNTRY_TLDS).split())

_STANDARD_PACKAGES = """
archive/tar archive/zip bufio bytes cmp compress/bzip2 compress/flate
compress/gzip compress/lzw compress/zlib container/heap container/list
container/ring context crypto crypto/aes crypto/cipher crypto/des crypto/dsa
crypto/ecdh crypto/ecdsa crypto/ed25519 crypto/elliptic crypto/hmac crypto/md5
crypto/rand crypto/rc4 crypto/rsa crypto/sha1 crypto/sha256 crypto/sha512
crypto/subtle crypto/tls crypto/x509 crypto/x509/pkix database/sql
database/sql/driver debug/buildinfo debug/dwarf debug/elf debug/gosym
debug/macho debug/pe debug/plan9obj embed encoding encoding/ascii85
encoding/asn1 encoding/base32 encoding/base64 encoding/binary encoding/csv
encoding/gob encoding/hex encoding/json encoding/pem encoding/xml errors
expvar flag fmt go/ast go/build go/build/constraint go/constant go/doc
go/format go/importer go/parser go/printer go/scanner go/token go/types hash
hash/adler32 hash/crc32 hash/crc64 hash/fnv hash/maphash html html/template
image image/color image/color/palette image/draw image/gif image/jpeg
image/png index/suffixarray io io/fs io/ioutil iter log log/slog log/syslog
maps math math/big math/bits math/cmplx math/rand mime mime/multipart
mime/quotedprintable net net/http net/http/cgi net/http/cookiejar
net/http/fcgi net/http/httptest net/http/httptrace net/http/httputil
net/http/pprof net/mail net/netip net/rpc net/rpc/jsonrpc net/smtp
net/textproto net/url os os/exec os/signal os/user path path/filepath plugin
reflect regexp regexp/syntax runtime runtime/cgo runtime/debug runtime/pprof
runtime/trace slices sort strconv strings sync sync/atomic syscall testing
testing/fstest testing/iotest testing/quick text/scanner text/tabwriter
text/template text/template/parse time time/tzdata unicode unicode/utf16
unicode/utf8 unique unsafe
"""

_VENDORED_PACKAGES = """
vendor/golang.org/x/crypto/chacha20poly1305 vendor/golang.org/x/crypto/cryptobyte
vendor/golang.org/x/net/dns/dnsmessage vendor/golang.org/x/net/http2/hpack
vendor/golang.org/x/net/idna vendor/golang.org/x/text/unicode/norm
"""

# Directories of the standard distribution that hold no package of their own.
_STANDARD_DIRECTORIES = """
archive cmd compress container database debug go index log/internal mime
net/http/internal os/internal runtime/internal testing/internal text
"""


def _build_path_flags() -> dict[str, int]:
    flags: dict[str, int] = {}
    for path in _STANDARD_DIRECTORIES.split():
        flags[path] = GO_REPO_PATH
    for path in _VENDORED_PACKAGES.split():
        flags[path] = GO_REPO_PATH | PACKAGE_PATH
    for path in _STANDARD_PACKAGES.split():
        flags[path] = GO_REPO_PATH | PACKAGE_PATH
    return flags


PATH_FLAGS: dict[str, int] = _build_path_flags()
